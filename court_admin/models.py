"""Pydantic models for the court administration API."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class AdminInfo(BaseModel):
    """Identity of the authenticated administrator."""
    admin_id: int = Field(..., description="Administrator identifier")
    admin_name: str = Field(..., description="Administrator display name")


class Court(BaseModel):
    """A bookable court owned by one administrator."""
    court_id: int = Field(..., description="Store-assigned court identifier")
    admin_id: int = Field(..., description="Owning administrator")
    court_name: str = Field(..., description="Court name, unique per administrator")
    location: str = Field(..., description="Where the court is")
    label: str = Field(..., description="Free-form tag")
    price_per_hour: float = Field(..., description="Hourly price")


# ── Requests ──────────────────────────────────────────────────────────────


class AddCourt(BaseModel):
    """Body of POST /add."""
    court_name: str = Field(..., min_length=1, max_length=64)
    location: str = Field(..., max_length=255)
    label: str = Field(..., max_length=64)
    price_per_hour: float = Field(..., ge=0)


class DelCourt(BaseModel):
    """Body of DELETE /del."""
    court_id: int = Field(..., ge=1)


class UpdateCourt(AddCourt):
    """Body of POST /update: the full replacement of a court's mutable fields."""
    court_id: int = Field(..., ge=1)


# ── Responses ─────────────────────────────────────────────────────────────


class CourtData(BaseModel):
    court: Court


class CourtListData(BaseModel):
    court: List[Court]


class MessageResponse(BaseModel):
    """Envelope without a payload."""
    code: int = Field(default=0, description="0 on success, negative on business error")
    msg: str = Field(..., description="Human-readable message")


class CourtResponse(MessageResponse):
    data: CourtData


class CourtListResponse(MessageResponse):
    data: CourtListData


class ErrorRef(BaseModel):
    error_id: str = Field(..., description="Correlation id to quote when reporting the error")


class ErrorResponse(MessageResponse):
    data: Optional[ErrorRef] = None


class HealthResponse(BaseModel):
    status: str = Field(..., description="\"ok\", or \"degraded\" when the database is unreachable")
    database: str = Field(..., description="\"ok\" or \"unavailable\"")
    version: str
    timestamp: datetime
