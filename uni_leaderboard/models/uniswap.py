from decimal import Decimal
from typing import Any, Dict, Optional
from pydantic import BaseModel

from uni_leaderboard.utils import parse_decimal


class Token(BaseModel):
    """Internal model for ERC-20 token data"""
    id: str
    symbol: str = ""
    name: str = ""
    decimals: int = 18


class SwapPool(BaseModel):
    """Pool a swap was executed against"""
    id: str
    token0: Token
    token1: Token


class SwapRecord(BaseModel):
    """Internal model for a Uniswap v3 swap event"""
    id: str
    timestamp: int
    sender: str
    recipient: str
    amount0: Decimal
    amount1: Decimal
    amount_usd: Decimal
    pool: SwapPool
    block_number: Optional[int] = None

    @classmethod
    def from_subgraph(cls, data: Dict[str, Any]) -> "SwapRecord":
        """Build a swap from the raw subgraph JSON object"""
        pool_data = data["pool"]
        transaction = data.get("transaction") or {}
        block_number = transaction.get("blockNumber")

        return cls(
            id=data["id"],
            timestamp=int(data["timestamp"]),
            sender=data["sender"],
            recipient=data.get("recipient", ""),
            amount0=parse_decimal(data["amount0"]),
            amount1=parse_decimal(data["amount1"]),
            amount_usd=parse_decimal(data["amountUSD"]),
            pool=SwapPool(
                id=pool_data["id"],
                token0=Token(
                    id=pool_data["token0"]["id"].lower(),
                    symbol=pool_data["token0"].get("symbol", ""),
                    name=pool_data["token0"].get("name", ""),
                    decimals=int(pool_data["token0"].get("decimals", 18))
                ),
                token1=Token(
                    id=pool_data["token1"]["id"].lower(),
                    symbol=pool_data["token1"].get("symbol", ""),
                    name=pool_data["token1"].get("name", ""),
                    decimals=int(pool_data["token1"].get("decimals", 18))
                )
            ),
            block_number=int(block_number) if block_number is not None else None
        )

    def target_side(self, token_address: str) -> Optional[int]:
        """Return 0 or 1 for the pool side holding the token, None if neither"""
        token = token_address.lower()
        if self.pool.token0.id.lower() == token:
            return 0
        if self.pool.token1.id.lower() == token:
            return 1
        return None

    def in_block_range(self, start_block: Optional[int] = None, end_block: Optional[int] = None) -> bool:
        # Swaps without a block number are kept
        if self.block_number is None:
            return True
        if start_block is not None and self.block_number < start_block:
            return False
        if end_block is not None and self.block_number > end_block:
            return False
        return True
