import logging
from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple

from uni_leaderboard.config import settings
from uni_leaderboard.models import (
    SwapRecord, TraderAccumulator, TraderStats, SummaryStats, LeaderboardResponse
)
from uni_leaderboard.utils import (
    normalize_address, format_amount, format_usd, format_signed_amount
)

logger = logging.getLogger(__name__)


class AggregatorService:
    """Turns a swap sequence into a per-trader leaderboard"""

    def classify(self, swap: SwapRecord, token_address: str) -> Optional[Tuple[bool, Decimal, Decimal]]:
        """
        Classify a swap relative to the target token.
        A negative target-side amount means the token flowed into the pool and is
        counted as a buy for the sender; a positive amount is a sell.
        Returns (is_buy, token_amount, usd_amount), or None if the token is on neither side.
        """
        side = swap.target_side(token_address)
        if side is None:
            return None

        raw_amount = swap.amount0 if side == 0 else swap.amount1
        is_buy = raw_amount < 0
        return is_buy, abs(raw_amount), swap.amount_usd

    def accumulate(self, swaps: Iterable[SwapRecord], token_address: str) -> Dict[str, TraderAccumulator]:
        """Build per-sender running totals, in first-seen order"""
        token = normalize_address(token_address)
        accumulators: Dict[str, TraderAccumulator] = {}
        processed = 0

        for swap in swaps:
            classification = self.classify(swap, token)
            if classification is None:
                logger.debug(f"Skipping swap {swap.id}: token {token} not in pool {swap.pool.id}")
                continue

            is_buy, token_amount, usd_amount = classification
            trader = normalize_address(swap.sender)
            accumulator = accumulators.get(trader)
            if accumulator is None:
                accumulator = TraderAccumulator(address=trader)
                accumulators[trader] = accumulator
            accumulator.record(is_buy, token_amount, usd_amount)

            processed += 1
            if processed % 1000 == 0:
                logger.info(f"Processed {processed} swaps")

        logger.info(f"Processed {processed} swaps, found {len(accumulators)} unique traders")
        return accumulators

    def to_trader_stats(self, accumulator: TraderAccumulator) -> TraderStats:
        return TraderStats(
            address=accumulator.address,
            total_buys=accumulator.total_buys,
            total_sells=accumulator.total_sells,
            total_buy_volume_token=format_amount(accumulator.buy_volume_token),
            total_sell_volume_token=format_amount(accumulator.sell_volume_token),
            total_buy_volume_usd=format_usd(accumulator.buy_volume_usd),
            total_sell_volume_usd=format_usd(accumulator.sell_volume_usd),
            total_volume_usd=format_usd(accumulator.total_volume_usd),
            net_volume_token=format_signed_amount(accumulator.net_volume_token),
            buy_sell_ratio=accumulator.buy_sell_ratio
        )

    def build_leaderboard(self, accumulators: Dict[str, TraderAccumulator],
                          limit: Optional[int] = None) -> LeaderboardResponse:
        """
        Sort traders by total USD volume (descending, ties keep first-seen order),
        keep the top `limit` and summarize only the returned slice.
        """
        if limit is None:
            limit = settings.default_limit

        # sorted() is stable, reverse=True included
        ranked = sorted(
            accumulators.values(),
            key=lambda acc: acc.total_volume_usd,
            reverse=True
        )[:limit]

        total_volume = sum((acc.total_volume_usd for acc in ranked), Decimal(0))
        total_traders = len(ranked)

        if total_traders > 0:
            average_volume = format_usd(total_volume / total_traders)
        else:
            average_volume = "0.00"

        summary = SummaryStats(
            total_traders=total_traders,
            total_volume_usd=format_usd(total_volume),
            total_buy_transactions=sum(acc.total_buys for acc in ranked),
            total_sell_transactions=sum(acc.total_sells for acc in ranked),
            average_volume_per_trader=average_volume
        )

        return LeaderboardResponse(
            traders=[self.to_trader_stats(acc) for acc in ranked],
            summary=summary
        )

    def aggregate(self, swaps: Iterable[SwapRecord], token_address: str,
                  limit: Optional[int] = None) -> LeaderboardResponse:
        return self.build_leaderboard(self.accumulate(swaps, token_address), limit)


# Global aggregator service
aggregator_service = AggregatorService()
