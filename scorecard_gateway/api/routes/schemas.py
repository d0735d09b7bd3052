"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional

from scorecard_gateway.domain.models import AcceptanceInfo, EstimateResult, TuitionInfo


class EstimateRequest(BaseModel):
    """Request body for POST /api/estimate; values are validated by the domain layer"""

    model_config = ConfigDict(populate_by_name=True)

    school_id: Any = Field(None, alias="schoolId", description="Scorecard unit id")
    income: Any = Field(None, description="Household income (currency units, >= 0)")


class SchoolSchema(BaseModel):
    id: int
    name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


class BreakdownSchema(BaseModel):
    """Four-part aid package"""

    model_config = ConfigDict(populate_by_name=True)

    grants: float
    work_study: float = Field(..., alias="workStudy")
    loans: float
    out_of_pocket: float = Field(..., alias="outOfPocket")


class EstimateResponse(BaseModel):
    """Response for POST /api/estimate"""

    model_config = ConfigDict(populate_by_name=True)

    school: SchoolSchema
    income: float
    bracket: str
    net_price: float = Field(..., alias="netPrice")
    breakdown: BreakdownSchema
    note: str

    @classmethod
    def from_result(cls, result: EstimateResult) -> "EstimateResponse":
        return cls(
            school=SchoolSchema(
                id=result.school.id,
                name=result.school.name,
                city=result.school.city,
                state=result.school.state,
            ),
            income=result.income,
            bracket=result.bracket.label,
            net_price=result.net_price,
            breakdown=BreakdownSchema(
                grants=result.breakdown.grants,
                work_study=result.breakdown.work_study,
                loans=result.breakdown.loans,
                out_of_pocket=result.breakdown.out_of_pocket,
            ),
            note=result.note,
        )


class TuitionResponse(BaseModel):
    """Response for GET /api/tuition"""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    name: Optional[str] = None
    in_state: Optional[float] = Field(None, alias="inState")
    out_state: Optional[float] = Field(None, alias="outState")

    @classmethod
    def from_info(cls, info: TuitionInfo) -> "TuitionResponse":
        return cls(id=info.id, name=info.name, in_state=info.in_state, out_state=info.out_of_state)


class AcceptanceResponse(BaseModel):
    """Response for GET /api/acceptance"""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    name: Optional[str] = None
    acceptance_rate_pct: Optional[float] = Field(None, alias="acceptanceRatePct")

    @classmethod
    def from_info(cls, info: AcceptanceInfo) -> "AcceptanceResponse":
        return cls(id=info.id, name=info.name, acceptance_rate_pct=info.acceptance_rate_pct)


class ErrorResponse(BaseModel):
    """Error body for every 4xx/5xx response"""

    error: str
    detail: Optional[Any] = None


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or missing API key"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
    502: {"model": ErrorResponse, "description": "College Scorecard API error"},
}

LOOKUP_ERROR_RESPONSES = {
    **ERROR_RESPONSES,
    404: {"model": ErrorResponse, "description": "School not found"},
}
