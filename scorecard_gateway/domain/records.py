"""Parsing of flattened College Scorecard records into domain models.

The Scorecard API returns dotted field names as flat keys when a ``fields=``
projection is requested (``{"school.name": ..., "latest.cost.tuition.in_state": ...}``).
Everything that reads those keys lives here so the estimate engine only ever
sees validated ``SchoolRecord`` objects.
"""

import math
from typing import Any, Dict, List, Mapping, Optional

from scorecard_gateway.domain.exceptions import RecordParseError
from scorecard_gateway.domain.models import (
    AcceptanceInfo,
    IncomeBracket,
    NetPriceTable,
    SchoolRecord,
    Sector,
    TuitionInfo,
)

ID = "id"
NAME = "school.name"
CITY = "school.city"
STATE = "school.state"
OWNERSHIP = "school.ownership"
TUITION_IN_STATE = "latest.cost.tuition.in_state"
TUITION_OUT_OF_STATE = "latest.cost.tuition.out_of_state"
ADMISSION_RATE = "latest.admissions.admission_rate.overall"


def net_price_field(sector: Sector, bracket: IncomeBracket) -> str:
    return f"latest.cost.net_price.{sector.value}.by_income_level.{bracket.value}"


SEARCH_FIELDS: List[str] = [ID, NAME, CITY, STATE]

ESTIMATE_FIELDS: List[str] = [
    ID,
    NAME,
    CITY,
    STATE,
    OWNERSHIP,
    TUITION_IN_STATE,
    TUITION_OUT_OF_STATE,
] + [net_price_field(sector, bracket) for sector in Sector for bracket in IncomeBracket]

TUITION_FIELDS: List[str] = [ID, NAME, TUITION_IN_STATE, TUITION_OUT_OF_STATE]

ACCEPTANCE_FIELDS: List[str] = [ID, NAME, ADMISSION_RATE]


def _number(raw: Mapping[str, Any], key: str) -> Optional[float]:
    value = raw.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise RecordParseError(f"Field {key!r} is not numeric: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise RecordParseError(f"Field {key!r} is not numeric: {value!r}") from e


def _integer(raw: Mapping[str, Any], key: str) -> Optional[int]:
    number = _number(raw, key)
    if number is None:
        return None
    if not number.is_integer():
        raise RecordParseError(f"Field {key!r} is not an integer: {raw.get(key)!r}")
    return int(number)


def _text(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    return None if value is None else str(value)


def parse_school_record(raw: Mapping[str, Any]) -> SchoolRecord:
    """
    Validate a flattened Scorecard record and build a SchoolRecord.

    Missing or null amounts become None; the estimate cascade treats them as
    unavailable.

    Raises:
        RecordParseError: If the id is missing or any numeric field is malformed
    """
    if not isinstance(raw, Mapping):
        raise RecordParseError(f"Expected a record object, got {type(raw).__name__}")

    school_id = _integer(raw, ID)
    if school_id is None:
        raise RecordParseError("Record has no id")

    net_prices: NetPriceTable = {
        (sector, bracket): _number(raw, net_price_field(sector, bracket))
        for sector in Sector
        for bracket in IncomeBracket
    }

    return SchoolRecord(
        id=school_id,
        name=_text(raw, NAME),
        city=_text(raw, CITY),
        state=_text(raw, STATE),
        ownership=_integer(raw, OWNERSHIP),
        tuition_in_state=_number(raw, TUITION_IN_STATE),
        tuition_out_of_state=_number(raw, TUITION_OUT_OF_STATE),
        net_prices=net_prices,
    )


def parse_tuition(raw: Mapping[str, Any]) -> TuitionInfo:
    return TuitionInfo(
        id=_integer(raw, ID),
        name=_text(raw, NAME),
        in_state=_number(raw, TUITION_IN_STATE),
        out_of_state=_number(raw, TUITION_OUT_OF_STATE),
    )


def parse_acceptance(raw: Mapping[str, Any]) -> AcceptanceInfo:
    """Admission rate arrives as a 0-1 fraction; report percent to one decimal (half-up)"""
    fraction = _number(raw, ADMISSION_RATE)
    pct = None if fraction is None else math.floor(fraction * 1000 + 0.5) / 10
    return AcceptanceInfo(id=_integer(raw, ID), name=_text(raw, NAME), acceptance_rate_pct=pct)


def first_result(page: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """First record of a result page, None if the page is empty"""
    results = page.get("results") or []
    if not isinstance(results, list):
        raise RecordParseError("Result page 'results' is not a list")
    return results[0] if results else None
