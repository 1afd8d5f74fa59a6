"""Booking calendar API router — month layout and drag-to-reschedule moves."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from hotel_desk.api.deps import get_calendar_store
from hotel_desk.calendar.grid import parse_month
from hotel_desk.calendar.placement import ALL_STATUSES
from hotel_desk.calendar.reschedule import DropTarget, plan_reschedule
from hotel_desk.calendar.store import CalendarStore, RecordNotFound, StoreError
from hotel_desk.calendar.view import CalendarView
from hotel_desk.schemas.calendar import BookingMove, BookingMoveResponse, CalendarResponse

router = APIRouter(prefix="/api/v1/calendar", tags=["calendar"])

logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=CalendarResponse,
    summary="Rooms × days layout for one month",
)
async def get_calendar(
    month: str | None = Query(None, description="Month to show (YYYY-MM or any YYYY-MM-DD in it); defaults to today"),
    status_filter: str = Query(ALL_STATUSES, alias="status", description="Booking status to show, or 'all'"),
    store: CalendarStore = Depends(get_calendar_store),
) -> CalendarResponse:
    """Return the month's days, rooms, visible bookings and cell placement.

    Rooms or bookings that fail to load come back as empty lists rather
    than an error.
    """
    try:
        reference = parse_month(month) if month else None
        view = CalendarView(store, month=reference, status_filter=status_filter)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None

    await view.load()
    return view.snapshot()


@router.post(
    "/moves",
    response_model=BookingMoveResponse,
    summary="Move a booking to another room and/or day",
)
async def move_booking(
    body: BookingMove,
    store: CalendarStore = Depends(get_calendar_store),
) -> BookingMoveResponse:
    """Shift a booking so that it starts on ``day`` in ``room_id``.

    Check-in and check-out move by the same number of days, so the length
    of the stay never changes. No availability check is made.
    """
    try:
        booking = await store.get_booking(body.booking_id)
        plan = plan_reschedule(booking, DropTarget(room_id=body.room_id, day=body.day))
        updated = await store.update_booking(plan.booking_id, plan.room_id, plan.check_in, plan.check_out)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from None
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to move booking",
        ) from None

    logger.info("Moved booking %s by %+d days to room %s", plan.booking_id, plan.delta_days, plan.room_id)
    return BookingMoveResponse(booking=updated, delta_days=plan.delta_days)
