"""
Court management endpoints (authenticated admins only).
"""

from fastapi import APIRouter, Request

from court_admin.dependencies import CurrentAdmin
from court_admin.errors import CourtAdminError
from court_admin.models import (
    AddCourt,
    CourtData,
    CourtListData,
    CourtListResponse,
    CourtResponse,
    DelCourt,
    ErrorResponse,
    MessageResponse,
    UpdateCourt,
)
from court_admin.rate_limit import WRITE, limiter
from court_admin.services.court_service import court_service

router = APIRouter(
    prefix="/api/admin/court",
    tags=["court"],
    responses={
        CourtAdminError.status_code: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.post(
    "/add",
    response_model=CourtResponse,
    operation_id="addCourt",
    summary="Create a court owned by the current admin",
)
@limiter.limit(WRITE)
async def add_court(request: Request, body: AddCourt, admin: CurrentAdmin) -> CourtResponse:
    court = await court_service.add(
        admin,
        court_name=body.court_name,
        location=body.location,
        label=body.label,
        price_per_hour=body.price_per_hour,
    )
    return CourtResponse(msg="court added", data=CourtData(court=court))


@router.delete(
    "/del",
    response_model=MessageResponse,
    operation_id="deleteCourt",
    summary="Delete a court that has no pending orders",
)
@limiter.limit(WRITE)
async def delete_court(request: Request, body: DelCourt, admin: CurrentAdmin) -> MessageResponse:
    await court_service.delete(admin, body.court_id)
    return MessageResponse(msg="court deleted")


@router.get(
    "/all",
    response_model=CourtListResponse,
    operation_id="listCourts",
    summary="List all courts of the current admin",
)
async def list_courts(admin: CurrentAdmin) -> CourtListResponse:
    courts = await court_service.list(admin)
    return CourtListResponse(msg="query succeeded", data=CourtListData(court=courts))


@router.post(
    "/update",
    response_model=CourtResponse,
    operation_id="updateCourt",
    summary="Replace the name, location, label and price of a court",
)
@limiter.limit(WRITE)
async def update_court(request: Request, body: UpdateCourt, admin: CurrentAdmin) -> CourtResponse:
    court = await court_service.update(
        admin,
        court_id=body.court_id,
        court_name=body.court_name,
        location=body.location,
        label=body.label,
        price_per_hour=body.price_per_hour,
    )
    return CourtResponse(msg="court updated", data=CourtData(court=court))
