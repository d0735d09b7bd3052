"""Aid estimate engine - core business logic for net price and package allocation"""

from typing import Any, Dict, Iterable, Optional

from scorecard_gateway.domain.inputs import coerce_income
from scorecard_gateway.domain.models import (
    AidBreakdown,
    EstimateResult,
    IncomeBracket,
    SchoolRecord,
)

DEFAULT_NET_PRICE = 15_000
DESIRED_OUT_OF_POCKET = 1_800
WORK_STUDY_INCOME_LIMIT = 110_000
WORK_STUDY_STANDARD = 2_000
WORK_STUDY_REDUCED = 1_500

GRANTS_BY_BRACKET: Dict[IncomeBracket, int] = {
    IncomeBracket.UP_TO_30K: 9_000,
    IncomeBracket.UP_TO_48K: 7_000,
    IncomeBracket.UP_TO_75K: 5_000,
    IncomeBracket.UP_TO_110K: 2_500,
    IncomeBracket.ABOVE_110K: 1_000,
}

ESTIMATE_NOTE = (
    "Heuristic estimate for demo only; net price from College Scorecard when available. "
    "This is not an official financial aid award."
)


def resolve_bracket(income: float) -> IncomeBracket:
    """
    Map income to its Scorecard income band.

    Bands are inclusive at the top: 30000 is "0-30000", 30001 is "30001-48000".
    """
    for bracket in IncomeBracket:
        if bracket.ceiling is None or income <= bracket.ceiling:
            return bracket
    return IncomeBracket.ABOVE_110K


def _first_positive(candidates: Iterable[Optional[float]]) -> Optional[float]:
    for value in candidates:
        if value is not None and value > 0:
            return value
    return None


def resolve_net_price(record: SchoolRecord, bracket: IncomeBracket) -> float:
    """
    Pick the net price through a fallback cascade (first strictly positive wins):

    1. Net price for the school's own sector at the bracket
    2. Net price for the other sector at the bracket
    3. In-state tuition
    4. Out-of-state tuition
    5. DEFAULT_NET_PRICE
    """
    own = record.sector
    price = _first_positive(
        [
            record.net_price(own, bracket),
            record.net_price(own.other(), bracket),
            record.tuition_in_state,
            record.tuition_out_of_state,
        ]
    )
    return float(DEFAULT_NET_PRICE) if price is None else price


def allocate_aid(net_price: float, income: float, bracket: IncomeBracket) -> AidBreakdown:
    """
    Split net price into grants, work-study, loans and out-of-pocket (waterfall).

    - Grants: fixed amount per bracket, clamped to [0, net_price]
    - Work-study: fixed by income, NOT clamped to the remaining balance
    - Loans: whatever is left above DESIRED_OUT_OF_POCKET
    - Out-of-pocket: the remainder

    The parts sum exactly to net_price whenever net_price - grants - work_study
    >= 0. Below that (tiny net prices) loans and out-of-pocket are both 0 and
    grants + work_study exceeds net_price.
    """
    grants = float(max(0, min(GRANTS_BY_BRACKET[bracket], net_price)))
    work_study = float(WORK_STUDY_STANDARD if income <= WORK_STUDY_INCOME_LIMIT else WORK_STUDY_REDUCED)

    remaining = net_price - grants - work_study
    loans = float(max(0, remaining - DESIRED_OUT_OF_POCKET))
    out_of_pocket = float(max(0, remaining - loans))

    return AidBreakdown(
        grants=grants,
        work_study=work_study,
        loans=loans,
        out_of_pocket=out_of_pocket,
    )


def compute_estimate(record: SchoolRecord, income: Any) -> EstimateResult:
    """
    Main entry point: resolve bracket and net price, then allocate the package.

    Raises:
        InvalidInputError: If income is missing, non-numeric or negative
    """
    income_value = coerce_income(income)
    bracket = resolve_bracket(income_value)
    net_price = resolve_net_price(record, bracket)
    breakdown = allocate_aid(net_price, income_value, bracket)

    return EstimateResult(
        school=record.summary(),
        income=income_value,
        bracket=bracket,
        net_price=net_price,
        breakdown=breakdown,
        note=ESTIMATE_NOTE,
    )
