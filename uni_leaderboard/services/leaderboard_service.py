import asyncio
import logging

from uni_leaderboard.config import settings, get_network_config
from uni_leaderboard.exceptions import FetchFailure, InvalidInputError
from uni_leaderboard.models import LeaderboardRequest, LeaderboardResponse
from uni_leaderboard.services.aggregator_service import aggregator_service
from uni_leaderboard.services.demo_service import demo_service
from uni_leaderboard.services.subgraph_service import subgraph_service
from uni_leaderboard.utils import is_valid_address, normalize_address

logger = logging.getLogger(__name__)


class LeaderboardService:
    """Runs one fetch-then-aggregate leaderboard request"""

    def validate_request(self, request: LeaderboardRequest) -> None:
        """Reject malformed requests before any remote call"""
        if request.limit is not None and request.limit <= 0:
            raise InvalidInputError(f"limit must be positive, got {request.limit}")

        if request.demo:
            return

        if not request.token_address:
            raise InvalidInputError("Token address is required when not in demo mode")

        if not is_valid_address(request.token_address):
            raise InvalidInputError(
                f"Invalid token address format: {request.token_address}. "
                "Expected 42-character hex string starting with '0x'"
            )

        for name, block in (("start_block", request.start_block), ("end_block", request.end_block)):
            if block is not None and block < 0:
                raise InvalidInputError(f"{name} cannot be negative")

        if (request.start_block is not None and request.end_block is not None
                and request.end_block < request.start_block):
            raise InvalidInputError("end_block cannot be before start_block")

        network = request.network or settings.default_network
        if get_network_config(network) is None:
            raise InvalidInputError(
                f"Unsupported network: {network}. "
                f"Supported networks: {', '.join(settings.supported_networks)}"
            )

    async def get_leaderboard(self, request: LeaderboardRequest) -> LeaderboardResponse:
        self.validate_request(request)
        limit = request.limit if request.limit is not None else settings.default_limit

        if request.demo:
            logger.info("Running in demo mode")
            return aggregator_service.build_leaderboard(demo_service.get_demo_accumulators(), limit)

        token = normalize_address(request.token_address)
        network = request.network or settings.default_network

        try:
            swaps = await asyncio.wait_for(
                subgraph_service.fetch_all_swaps(network, token, request.start_block, request.end_block),
                timeout=settings.fetch_timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Fetching swaps for {token} on {network} timed out")
            raise FetchFailure(
                f"Fetching swaps timed out after {settings.fetch_timeout}s"
            ) from e

        if not swaps:
            logger.info(f"No swaps found for token {token} on {network}")

        return aggregator_service.aggregate(swaps, token, limit)


# Global leaderboard service
leaderboard_service = LeaderboardService()
