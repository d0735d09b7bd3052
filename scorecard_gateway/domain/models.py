"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class Sector(str, Enum):
    """Which net-price table the Scorecard publishes for a school"""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def for_ownership(cls, ownership: Optional[int]) -> "Sector":
        # 1 = public, 2 = private nonprofit, 3 = private for-profit
        return cls.PUBLIC if ownership == 1 else cls.PRIVATE

    def other(self) -> "Sector":
        return Sector.PRIVATE if self is Sector.PUBLIC else Sector.PUBLIC


class IncomeBracket(str, Enum):
    """Household income bands used by the Scorecard net-price tables"""

    UP_TO_30K = "0-30000"
    UP_TO_48K = "30001-48000"
    UP_TO_75K = "48001-75000"
    UP_TO_110K = "75001-110000"
    ABOVE_110K = "110001-plus"

    @property
    def ceiling(self) -> Optional[int]:
        """Highest income (inclusive) in the band, None for the open top band"""
        return _CEILINGS[self]

    @property
    def label(self) -> str:
        return self.value


_CEILINGS: Dict[IncomeBracket, Optional[int]] = {
    IncomeBracket.UP_TO_30K: 30_000,
    IncomeBracket.UP_TO_48K: 48_000,
    IncomeBracket.UP_TO_75K: 75_000,
    IncomeBracket.UP_TO_110K: 110_000,
    IncomeBracket.ABOVE_110K: None,
}

NetPriceTable = Dict[Tuple[Sector, IncomeBracket], Optional[float]]


@dataclass(frozen=True)
class SchoolSummary:
    """Identifying fields shown alongside an estimate"""

    id: int
    name: Optional[str]
    city: Optional[str]
    state: Optional[str]


@dataclass(frozen=True)
class SchoolRecord:
    """Snapshot of one institution as returned by the Scorecard API"""

    id: int
    name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    ownership: Optional[int] = None
    tuition_in_state: Optional[float] = None
    tuition_out_of_state: Optional[float] = None
    net_prices: NetPriceTable = field(default_factory=dict)

    @property
    def sector(self) -> Sector:
        return Sector.for_ownership(self.ownership)

    def net_price(self, sector: Sector, bracket: IncomeBracket) -> Optional[float]:
        return self.net_prices.get((sector, bracket))

    def summary(self) -> SchoolSummary:
        return SchoolSummary(id=self.id, name=self.name, city=self.city, state=self.state)


@dataclass(frozen=True)
class AidBreakdown:
    """Four-part split of the net price"""

    grants: float
    work_study: float
    loans: float
    out_of_pocket: float

    @property
    def total(self) -> float:
        return self.grants + self.work_study + self.loans + self.out_of_pocket


@dataclass(frozen=True)
class EstimateResult:
    """Output of the estimate engine"""

    school: SchoolSummary
    income: float
    bracket: IncomeBracket
    net_price: float
    breakdown: AidBreakdown
    note: str


@dataclass(frozen=True)
class TuitionInfo:
    """Published tuition for one school"""

    id: Optional[int]
    name: Optional[str]
    in_state: Optional[float]
    out_of_state: Optional[float]


@dataclass(frozen=True)
class AcceptanceInfo:
    """Overall admission rate for one school, as a percentage"""

    id: Optional[int]
    name: Optional[str]
    acceptance_rate_pct: Optional[float]
