"""Command line entry point: print a trader leaderboard or serve it over HTTP."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from uni_leaderboard.config import settings
from uni_leaderboard.exceptions import FetchFailure, InvalidInputError
from uni_leaderboard.models import LeaderboardRequest, LeaderboardResponse
from uni_leaderboard.services import leaderboard_service, subgraph_service
from uni_leaderboard.utils import to_checksum_address, is_valid_address

logger = logging.getLogger(__name__)

TABLE_RULE = "=" * 118
ROW_RULE = "-" * 118


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uni-leaderboard",
        description="Fetches Uniswap v3 swap data and creates trader leaderboards",
    )
    parser.add_argument("-t", "--token", help="Token contract address (ERC20), not required in demo mode")
    parser.add_argument("-s", "--start-block", type=int, help="Only count swaps at or after this block")
    parser.add_argument("-e", "--end-block", type=int, help="Only count swaps at or before this block")
    parser.add_argument("-l", "--limit", type=int, help=f"Maximum number of traders to display (default {settings.default_limit})")
    parser.add_argument("--demo", action="store_true", help="Use sample data instead of querying the subgraph")
    parser.add_argument("--network", default=settings.default_network, help="Network to query (ethereum, arbitrum, polygon, optimism, base)")
    parser.add_argument("--server", action="store_true", help="Run as HTTP server")
    parser.add_argument("--port", type=int, default=settings.default_port, help="Server port")
    return parser


def _display_address(address: str) -> str:
    if is_valid_address(address):
        return to_checksum_address(address)
    return address


def render_leaderboard(response: LeaderboardResponse) -> str:
    lines = [
        "",
        "UNISWAP V3 TRADER LEADERBOARD",
        TABLE_RULE,
        f"{'Rank':<5} {'Trader Address':<43} {'Buys':<8} {'Sells':<8} {'Total Vol USD':<16} {'Net Token Vol':<18} {'Buy/Sell Ratio':<14}",
        ROW_RULE,
    ]
    for rank, trader in enumerate(response.traders, start=1):
        lines.append(
            f"{rank:<5} {_display_address(trader.address):<43} {trader.total_buys:<8} {trader.total_sells:<8} "
            f"${trader.total_volume_usd:<15} {trader.net_volume_token:<18} {trader.buy_sell_ratio:<14.2f}"
        )
    lines.append(TABLE_RULE)

    summary = response.summary
    lines.extend([
        "",
        "SUMMARY STATISTICS",
        "-" * 18,
        f"Total Traders: {summary.total_traders}",
        f"Total Volume (USD): ${summary.total_volume_usd}",
        f"Total Buy Transactions: {summary.total_buy_transactions}",
        f"Total Sell Transactions: {summary.total_sell_transactions}",
        f"Average Volume per Trader: ${summary.average_volume_per_trader}",
    ])
    return "\n".join(lines)


def render_empty_hint(token: str) -> str:
    return "\n".join([
        f"No swaps found for token {token}.",
        "Possible reasons:",
        "  - The subgraph endpoint requires an API key (set GRAPH_API_KEY)",
        "  - No trading activity in the specified block range",
        "  - Token address is incorrect or not traded on Uniswap v3 on this network",
        "Try running with --demo to see sample output.",
    ])


async def run(request: LeaderboardRequest) -> LeaderboardResponse:
    try:
        return await leaderboard_service.get_leaderboard(request)
    finally:
        await subgraph_service.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if args.server:
        import uvicorn

        logger.info(f"Starting leaderboard HTTP server on {settings.server_host}:{args.port}")
        uvicorn.run("main:app", host=settings.server_host, port=args.port, log_level=settings.log_level.lower())
        return 0

    request = LeaderboardRequest(
        token_address=args.token,
        start_block=args.start_block,
        end_block=args.end_block,
        limit=args.limit,
        demo=args.demo,
        network=args.network,
    )

    try:
        response = asyncio.run(run(request))
    except InvalidInputError as e:
        parser.error(str(e))
    except FetchFailure as e:
        logger.error(f"Leaderboard run failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not response.traders and not args.demo:
        print(render_empty_hint(args.token))
        return 0

    print(render_leaderboard(response))
    return 0


if __name__ == "__main__":
    sys.exit(main())
