from .leaderboard import router

__all__ = ["router"]
