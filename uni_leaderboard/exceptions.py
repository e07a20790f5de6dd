from typing import Optional


class LeaderboardError(Exception):
    """Base class for leaderboard failures"""


class InvalidInputError(LeaderboardError):
    """Request rejected before any remote call was made"""


class FetchFailure(LeaderboardError):
    """Remote subgraph request failed; the whole run is aborted"""

    def __init__(self, message: str, endpoint: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.status = status
