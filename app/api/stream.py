"""
Server-Sent Event live views.

Each stream sends the full result set when it opens and again after every
change notification for its topic. Snapshots use a short-lived session so
an open stream never holds a database connection.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Literal

from fastapi import APIRouter, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from sse_starlette.sse import EventSourceResponse

from app.api.project import to_card
from app.core.events import ChangeFeed, PROJECTS_TOPIC, history_topic, reports_topic
from app.core.exceptions import ReadFailure
from app.core.settings import settings
from app.crud.history import get_project_history
from app.crud.project import list_active_projects
from app.crud.report import list_reports
from app.dependencies import get_change_feed, get_current_identity, get_session_factory
from app.schemas.auth import Identity
from app.schemas.history import ReportRead

log = logging.getLogger(__name__)

router = APIRouter(prefix="/stream", tags=["Live views"])


def _with_session(session_factory: Callable[[], Session], read: Callable[[Session], List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    db = session_factory()
    try:
        return read(db)
    finally:
        db.close()


def projects_snapshot(session_factory: Callable[[], Session], sort_by: str = "last_update_date", order: str = "desc") -> List[Dict[str, Any]]:
    def read(db: Session) -> List[Dict[str, Any]]:
        now = datetime.now(timezone.utc)
        return [to_card(p, now).model_dump(mode="json") for p in list_active_projects(db, sort_by=sort_by, order=order)]
    return _with_session(session_factory, read)


def reports_snapshot(session_factory: Callable[[], Session], project_id: int) -> List[Dict[str, Any]]:
    def read(db: Session) -> List[Dict[str, Any]]:
        return [ReportRead.model_validate(r).model_dump(mode="json") for r in list_reports(db, project_id)]
    return _with_session(session_factory, read)


def history_snapshot(session_factory: Callable[[], Session], project_id: int) -> List[Dict[str, Any]]:
    def read(db: Session) -> List[Dict[str, Any]]:
        return [entry.model_dump(mode="json") for entry in get_project_history(db, project_id)]
    return _with_session(session_factory, read)


async def snapshot_events(request: Request, feed: ChangeFeed, topic: str, snapshot: Callable[[], List[Dict[str, Any]]]):
    """
    Yields one "snapshot" event on connect and one per change notification.
    A failed read ends the stream with an "error" event; the client decides
    whether to reconnect.
    """
    queue = feed.subscribe(topic)
    log_prefix = f"[stream {topic}] "
    try:
        while True:
            try:
                data = await run_in_threadpool(snapshot)
            except ReadFailure as e:
                log.error("%sSnapshot failed: %s", log_prefix, e)
                yield {"event": "error", "data": json.dumps({"detail": str(e)})}
                break
            yield {"event": "snapshot", "data": json.dumps(data)}

            while True:
                if await request.is_disconnected():
                    log.info("%sClient disconnected.", log_prefix)
                    return
                try:
                    await asyncio.wait_for(queue.get(), timeout=settings.SSE_PING_SECONDS)
                    break
                except asyncio.TimeoutError:
                    continue
    finally:
        feed.unsubscribe(topic, queue)


@router.get("/projects")
async def stream_projects(
    request: Request,
    sort_by: Literal["last_update_date", "planned_end"] = Query("last_update_date"),
    order: Literal["asc", "desc"] = Query("desc"),
    identity: Identity = Depends(get_current_identity),
    feed: ChangeFeed = Depends(get_change_feed),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    snapshot = lambda: projects_snapshot(session_factory, sort_by, order)  # noqa: E731
    return EventSourceResponse(
        snapshot_events(request, feed, PROJECTS_TOPIC, snapshot),
        ping=settings.SSE_PING_SECONDS,
    )


@router.get("/projects/{project_id}/reports")
async def stream_reports(
    project_id: int,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    feed: ChangeFeed = Depends(get_change_feed),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    snapshot = lambda: reports_snapshot(session_factory, project_id)  # noqa: E731
    return EventSourceResponse(
        snapshot_events(request, feed, reports_topic(project_id), snapshot),
        ping=settings.SSE_PING_SECONDS,
    )


@router.get("/projects/{project_id}/history")
async def stream_history(
    project_id: int,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    feed: ChangeFeed = Depends(get_change_feed),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    snapshot = lambda: history_snapshot(session_factory, project_id)  # noqa: E731
    return EventSourceResponse(
        snapshot_events(request, feed, history_topic(project_id), snapshot),
        ping=settings.SSE_PING_SECONDS,
    )
