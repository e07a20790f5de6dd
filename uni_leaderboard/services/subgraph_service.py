import asyncio
import logging
import aiohttp

from typing import Any, Dict, List, Optional
from uni_leaderboard.config import settings
from uni_leaderboard.exceptions import FetchFailure
from uni_leaderboard.models import SwapRecord
from uni_leaderboard.utils import normalize_address

logger = logging.getLogger(__name__)


class SubgraphService:
    """Service for fetching swap data from Uniswap v3 subgraphs"""

    def __init__(self):
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=settings.request_timeout)
            )
        return self._session

    async def close(self):
        """Close aiohttp session"""
        if self._session and not self._session.closed:
            await self._session.close()

    def _get_swap_query(self, token_address: str) -> str:
        """Swaps touching the token on either pool side, most recent first"""
        return f"""
        query GetSwaps($skip: Int!, $first: Int!) {{
            swaps(
                skip: $skip,
                first: $first,
                orderBy: timestamp,
                orderDirection: desc,
                where: {{
                    or: [
                        {{ pool_: {{ token0: "{token_address}" }} }},
                        {{ pool_: {{ token1: "{token_address}" }} }}
                    ]
                }}
            ) {{
                id
                timestamp
                sender
                recipient
                amount0
                amount1
                amountUSD
                pool {{
                    id
                    token0 {{
                        id
                        symbol
                        name
                        decimals
                    }}
                    token1 {{
                        id
                        symbol
                        name
                        decimals
                    }}
                }}
                transaction {{
                    blockNumber
                }}
            }}
        }}
        """

    def _describe_graphql_errors(self, errors: List[Any]) -> str:
        messages = []
        for error in errors:
            if isinstance(error, dict):
                messages.append(str(error.get("message", error)))
            else:
                messages.append(str(error))
        combined = ", ".join(messages)

        lowered = combined.lower()
        if "auth" in lowered:
            return (
                f"Authentication error: the subgraph gateway rejected the request ({combined}). "
                "The API key may have expired or hit its rate limit; try demo mode instead."
            )
        if "subgraph not found" in lowered:
            return (
                f"Subgraph not found: the subgraph ID may be outdated ({combined}). "
                "Try demo mode instead."
            )
        return f"GraphQL errors: {combined}"

    async def _read_body(self, response: aiohttp.ClientResponse) -> str:
        """Response body as text, undecodable bytes replaced"""
        raw = await response.read()
        return raw.decode("utf-8", errors="replace")

    async def query_subgraph(self, network: str, query: str, variables: Optional[Dict] = None) -> Dict:
        """Execute GraphQL query against subgraph, raising FetchFailure on any problem"""
        subgraph_url = settings.get_subgraph_url(network)
        if not subgraph_url:
            logger.error(f"No subgraph URL configured for network: {network}")
            raise FetchFailure(
                f"No subgraph URL configured for network '{network}'. "
                "Set GRAPH_API_KEY or UNISWAP_SUBGRAPH_URL."
            )

        session = await self._get_session()

        payload = {
            "query": query,
            "variables": variables or {}
        }

        try:
            async with session.post(subgraph_url, json=payload) as response:
                if response.status != 200:
                    body = await self._read_body(response)
                    logger.error(f"Subgraph request failed with status {response.status}")
                    raise FetchFailure(
                        f"HTTP error {response.status} from {subgraph_url}: {body[:500]}",
                        endpoint=subgraph_url,
                        status=response.status
                    )

                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    # Also covers bodies that are not valid UTF-8
                    body = await self._read_body(response)
                    logger.error(f"Failed to parse subgraph response as JSON: {e}")
                    if body.lstrip().lower().startswith(("<!doctype html", "<html")):
                        raise FetchFailure(
                            "Received HTML error page instead of JSON. The token might not exist "
                            "or have any pools on Uniswap v3.",
                            endpoint=subgraph_url,
                            status=response.status
                        ) from e
                    raise FetchFailure(
                        f"Failed to parse API response: {e}",
                        endpoint=subgraph_url,
                        status=response.status
                    ) from e

                if not isinstance(data, dict):
                    raise FetchFailure(
                        "Unexpected subgraph response shape",
                        endpoint=subgraph_url,
                        status=response.status
                    )

                if data.get("errors"):
                    logger.error(f"Subgraph query errors: {data['errors']}")
                    raise FetchFailure(
                        self._describe_graphql_errors(data["errors"]),
                        endpoint=subgraph_url,
                        status=response.status
                    )
                return data.get("data") or {}
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error querying subgraph for {network}: {e!r}")
            raise FetchFailure(
                f"Request to {subgraph_url} failed: {e!r}",
                endpoint=subgraph_url
            ) from e

    async def fetch_swaps(self, network: str, token_address: str, skip: int, first: int) -> List[Dict]:
        """Fetch one page of raw swap objects"""
        query = self._get_swap_query(normalize_address(token_address))
        variables = {"skip": skip, "first": first}

        result = await self.query_subgraph(network, query, variables)
        return result.get("swaps") or []

    async def fetch_all_swaps(self, network: str, token_address: str,
                              start_block: Optional[int] = None,
                              end_block: Optional[int] = None) -> List[SwapRecord]:
        """
        Page through all swaps for a token.
        Stops on an empty page, a short page, or once max_swaps records were retrieved.
        Any failed page aborts the whole fetch.
        """
        token = normalize_address(token_address)
        page_size = settings.batch_size
        max_swaps = settings.max_swaps

        all_swaps: List[SwapRecord] = []
        skip = 0
        retrieved = 0

        logger.info(f"Fetching swaps for token {token} on {network} (cap {max_swaps})")

        while True:
            batch = await self.fetch_swaps(network, token, skip, page_size)
            if not batch:
                break

            retrieved += len(batch)

            for swap_data in batch:
                try:
                    swap = SwapRecord.from_subgraph(swap_data)
                except (KeyError, TypeError, ValueError, ArithmeticError) as e:
                    swap_id = swap_data.get("id", "?") if isinstance(swap_data, dict) else swap_data
                    logger.warning(f"Skipping malformed swap {swap_id}: {e!r}")
                    continue

                if swap.target_side(token) is None:
                    continue
                if not swap.in_block_range(start_block, end_block):
                    continue
                all_swaps.append(swap)

            logger.info(f"Fetched {len(batch)} swaps (total retrieved: {retrieved})")

            if len(batch) < page_size or retrieved >= max_swaps:
                break

            skip += page_size

        logger.info(f"Total swaps kept: {len(all_swaps)} from {network}")
        return all_swaps


# Global subgraph service instance
subgraph_service = SubgraphService()
