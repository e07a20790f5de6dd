from .uniswap import *
from .leaderboard import *

__all__ = [
    "Token", "SwapPool", "SwapRecord",
    "TraderAccumulator", "TraderStats", "SummaryStats",
    "LeaderboardRequest", "LeaderboardResponse"
]
