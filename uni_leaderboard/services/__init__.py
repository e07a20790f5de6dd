from .subgraph_service import subgraph_service
from .aggregator_service import aggregator_service
from .demo_service import demo_service
from .leaderboard_service import leaderboard_service

__all__ = [
    "subgraph_service",
    "aggregator_service",
    "demo_service",
    "leaderboard_service"
]
