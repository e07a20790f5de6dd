from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TraderAccumulator(BaseModel):
    """Running totals for one trader address during a single run"""
    address: str
    total_buys: int = 0
    total_sells: int = 0
    buy_volume_token: Decimal = Decimal(0)
    sell_volume_token: Decimal = Decimal(0)
    buy_volume_usd: Decimal = Decimal(0)
    sell_volume_usd: Decimal = Decimal(0)

    def record(self, is_buy: bool, token_amount: Decimal, usd_amount: Decimal) -> None:
        if is_buy:
            self.total_buys += 1
            self.buy_volume_token += token_amount
            self.buy_volume_usd += usd_amount
        else:
            self.total_sells += 1
            self.sell_volume_token += token_amount
            self.sell_volume_usd += usd_amount

    @property
    def total_volume_usd(self) -> Decimal:
        return self.buy_volume_usd + self.sell_volume_usd

    @property
    def net_volume_token(self) -> Decimal:
        return self.buy_volume_token - self.sell_volume_token

    @property
    def buy_sell_ratio(self) -> float:
        # No sells: the ratio is the raw buy count
        if self.total_sells > 0:
            return self.total_buys / self.total_sells
        return float(self.total_buys)


class TraderStats(BaseModel):
    address: str
    total_buys: int
    total_sells: int
    total_buy_volume_token: str
    total_sell_volume_token: str
    total_buy_volume_usd: str
    total_sell_volume_usd: str
    total_volume_usd: str
    net_volume_token: str
    buy_sell_ratio: float


class SummaryStats(BaseModel):
    total_traders: int
    total_volume_usd: str
    total_buy_transactions: int
    total_sell_transactions: int
    average_volume_per_trader: str


class LeaderboardRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token_address: Optional[str] = None
    start_block: Optional[int] = None
    end_block: Optional[int] = None
    limit: Optional[int] = None
    demo: Optional[bool] = False
    network: Optional[str] = None


class LeaderboardResponse(BaseModel):
    traders: List[TraderStats] = Field(default_factory=list)
    summary: SummaryStats
