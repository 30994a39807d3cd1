"""Month calendar endpoints."""

import time
from contextlib import contextmanager
from datetime import date
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Request, status

from api.logging import RequestLog, log_request
from api.models.requests import AgendaRequest, DayEventsRequest, MonthViewRequest, ToggleRequest
from api.models.responses import (
    AgendaGroup,
    AgendaResponse,
    CellOut,
    ColorEntryOut,
    DateOut,
    DayEventsResponse,
    ErrorCodes,
    EventOut,
    MonthViewResponse,
    NavigateResponse,
    SkippedEventOut,
    ToggleResponse,
)
from core.config import CALENDAR_VISIBLE_CAP, CALENDAR_WEEK_START
from core.errors import InvalidConfiguration
from services import expansion
from services.engine import CalendarEngine
from services.indexer import events_on, group_by_day
from services.navigation import month_date_range, navigate, year_options
from services.presentation import (
    format_date_long,
    format_month_view,
    month_label,
    month_options,
    weekday_headers,
)

router = APIRouter(prefix="/v1/calendar")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@contextmanager
def logged_request(request: Request, endpoint: str):
    """
    Yield a RequestLog and record it once the handler finishes.

    Engine errors are translated to HTTPException here so every endpoint
    reports them the same way.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint=endpoint,
        method=request.method,
        client_ip=get_client_ip(request),
    )

    try:
        yield request_log
        request_log.status_code = 200

    except HTTPException as e:
        if isinstance(e.detail, dict):
            request_log.record_error(e.status_code, e.detail.get("code"), e.detail.get("error"))
        else:
            request_log.record_error(e.status_code, None, str(e.detail))
        raise

    except InvalidConfiguration as e:
        request_log.record_error(400, ErrorCodes.INVALID_CONFIGURATION, str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid calendar configuration",
                "code": ErrorCodes.INVALID_CONFIGURATION,
                "details": [str(e)],
            },
        )

    except ValueError as e:
        # Grids reaching past year 1 or year 9999
        request_log.record_error(400, ErrorCodes.INVALID_REQUEST, str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid calendar request",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": [str(e)],
            },
        )

    except Exception as e:
        request_log.record_error(500, ErrorCodes.INTERNAL_ERROR, str(e))
        raise

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass


@router.post("/month-view", response_model=MonthViewResponse)
async def month_view_endpoint(request: Request, body: MonthViewRequest):
    """
    Build the 42-cell month view for the selected month.

    The response carries the updated color map; send it back on the next call
    so categories keep their colors while navigating.
    """
    with logged_request(request, "/v1/calendar/month-view") as request_log:
        request_log.year = body.year
        request_log.month0 = body.month0
        request_log.events_received = len(body.events)

        engine = CalendarEngine(
            palette=body.palette,
            week_start=body.week_start or CALENDAR_WEEK_START,
            visible_cap=body.cap or CALENDAR_VISIBLE_CAP,
        )
        # Timestamps are indexed as written; "today" is the server's local date
        view, color_map = engine.build_month_view(
            body.year,
            body.month0,
            [e.to_event() for e in body.events],
            body.color_map_dict(),
            today=body.today or date.today(),
        )

        request_log.events_placed = view.event_count
        request_log.events_skipped = view.skipped_count
        for skipped in view.diagnostics:
            request_log.add_detail(
                "skipped_event", f"{skipped.event_id}: {skipped.reason} ({skipped.occurs_at!r})"
            )

        cells = format_month_view(view, body.expanded_set(), engine.visible_cap)
        return MonthViewResponse(
            year=view.year,
            month0=view.month0,
            label=month_label(view.year, view.month0),
            week_start=view.week_start.value,
            weekdays=weekday_headers(view.week_start),
            cells=[CellOut.from_view(cell) for cell in cells],
            color_map=[ColorEntryOut(key=k, color=c) for k, c in color_map.items()],
            skipped_count=view.skipped_count,
            skipped=[
                SkippedEventOut(event_id=s.event_id, occurs_at=s.occurs_at, reason=s.reason)
                for s in view.diagnostics
            ],
        )


@router.post("/expansion/toggle", response_model=ToggleResponse)
async def toggle_expansion_endpoint(request: Request, body: ToggleRequest):
    """Expand or collapse one day; returns the new expanded set."""
    with logged_request(request, "/v1/calendar/expansion/toggle"):
        target = body.date.to_calendar_date()
        expanded = expansion.toggle(target, {d.to_calendar_date() for d in body.expanded})
        return ToggleResponse(
            date=DateOut.from_date(target),
            is_expanded=expansion.is_expanded(target, expanded),
            expanded=[DateOut.from_date(d) for d in sorted(expanded)],
        )


@router.get("/navigate", response_model=NavigateResponse)
async def navigate_endpoint(
    request: Request,
    year: int = Query(ge=1, le=9999),
    month0: int = Query(),
    direction: Literal["prev", "next", "today", "stay"] = "stay",
):
    """Resolve a navigation control to a month and its fetch window."""
    with logged_request(request, "/v1/calendar/navigate") as request_log:
        request_log.year = year
        request_log.month0 = month0

        today = date.today()
        new_year, new_month0 = navigate(year, month0, direction, today=today)
        start, end = month_date_range(new_year, new_month0)
        return NavigateResponse(
            year=new_year,
            month0=new_month0,
            label=month_label(new_year, new_month0),
            range_start=start.isoformat(timespec="milliseconds"),
            range_end=end.isoformat(timespec="milliseconds"),
            month_options=month_options(),
            year_options=year_options(today),
        )


@router.post("/day", response_model=DayEventsResponse)
async def day_events_endpoint(request: Request, body: DayEventsRequest):
    """Events of a single day, for the day view."""
    with logged_request(request, "/v1/calendar/day") as request_log:
        request_log.events_received = len(body.events)

        target = body.date.to_calendar_date()
        # Validates the day exists in that month
        target.to_date()
        events = events_on(target, [e.to_event() for e in body.events])
        request_log.events_placed = len(events)
        return DayEventsResponse(
            date=DateOut.from_date(target),
            label=format_date_long(target),
            events=[EventOut.from_event(e) for e in events],
        )


@router.post("/agenda", response_model=AgendaResponse)
async def agenda_endpoint(request: Request, body: AgendaRequest):
    """Events grouped by day, for the list view."""
    with logged_request(request, "/v1/calendar/agenda") as request_log:
        request_log.events_received = len(body.events)

        groups = group_by_day([e.to_event() for e in body.events])
        request_log.events_placed = sum(len(events) for _, events in groups)
        return AgendaResponse(
            groups=[
                AgendaGroup(
                    date=DateOut.from_date(d),
                    label=format_date_long(d),
                    events=[EventOut.from_event(e) for e in events],
                )
                for d, events in groups
            ]
        )
