"""Route optimization and viewport endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, Optional

import httpx
from fastapi import APIRouter, File, HTTPException, Query, Response, UploadFile, status
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from ...config import settings
from ...schemas.routing import (
    OptimizationSessionResponse,
    RouteRequest,
    RouteViewModel,
    TableResponse,
)
from ...services.i18n import get_translations
from ...services.map import render_route_map
from ...services.optimizer import OptimizerAPIError, UploadError, optimize_route, parse_upload
from ...services.outputs.routing_formatter import build_table_rows, route_view_to_model, table_rows_to_csv
from ...services.sessions import OptimizationSession, sessions

router = APIRouter(prefix="/route", tags=["route"])

LanguageParam = Annotated[
    Optional[str],
    Query(description="UI language code (en, tr); defaults to the configured language"),
]


def _strings(lang: str | None) -> dict[str, str]:
    return get_translations(lang or settings.default_language)


def _run_optimization(payload: RouteRequest, strings: dict[str, str]) -> OptimizationSessionResponse:
    try:
        session_id, session = optimize_route(payload)
    except OptimizerAPIError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"{strings['api_error']} {exc.message}",
        ) from exc
    except httpx.TimeoutException as exc:
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=f"{strings['api_error']} {exc}",
        ) from exc
    except ConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{strings['unknown_error']}: {exc}",
        ) from exc
    return OptimizationSessionResponse(
        sessionId=session_id,
        result=session.response,
        view=route_view_to_model(session.controller.view(), session.controller),
    )


def _get_session(session_id: str, lang: str | None) -> OptimizationSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_strings(lang)["session_not_found"])
    return session


def _current_view(session: OptimizationSession) -> RouteViewModel:
    return route_view_to_model(session.controller.view(), session.controller)


@router.post("/optimize", response_model=OptimizationSessionResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RouteRequest, lang: LanguageParam = None) -> OptimizationSessionResponse:
    return _run_optimization(payload, _strings(lang))


@router.post("/upload", response_model=OptimizationSessionResponse, status_code=status.HTTP_200_OK)
async def upload(file: UploadFile = File(...), lang: LanguageParam = None) -> OptimizationSessionResponse:
    """Optimize the stops in an uploaded JSON file."""
    strings = _strings(lang)
    content = await file.read()
    try:
        payload = parse_upload(file.filename, content, lang or settings.default_language)
    except UploadError as exc:
        code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE if exc.unsupported_type else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=code, detail=str(exc)) from exc
    return await run_in_threadpool(_run_optimization, payload, strings)


@router.get("/sessions/{session_id}", response_model=RouteViewModel, status_code=status.HTTP_200_OK)
def get_view(session_id: str, lang: LanguageParam = None) -> RouteViewModel:
    return _current_view(_get_session(session_id, lang))


@router.post("/sessions/{session_id}/next", response_model=RouteViewModel, status_code=status.HTTP_200_OK)
def next_page(session_id: str, lang: LanguageParam = None) -> RouteViewModel:
    session = _get_session(session_id, lang)
    return route_view_to_model(session.controller.next_page(), session.controller)


@router.post("/sessions/{session_id}/previous", response_model=RouteViewModel, status_code=status.HTTP_200_OK)
def previous_page(session_id: str, lang: LanguageParam = None) -> RouteViewModel:
    session = _get_session(session_id, lang)
    return route_view_to_model(session.controller.previous_page(), session.controller)


@router.post("/sessions/{session_id}/show-all", response_model=RouteViewModel, status_code=status.HTTP_200_OK)
def show_all(
    session_id: str,
    enabled: bool = Query(default=True, description="True to show every stop, False to return to pages"),
    lang: LanguageParam = None,
) -> RouteViewModel:
    session = _get_session(session_id, lang)
    return route_view_to_model(session.controller.set_show_all(enabled), session.controller)


@router.post("/sessions/{session_id}/reset", response_model=RouteViewModel, status_code=status.HTTP_200_OK)
def reset(session_id: str, lang: LanguageParam = None) -> RouteViewModel:
    session = _get_session(session_id, lang)
    return route_view_to_model(session.controller.reset(), session.controller)


@router.get("/sessions/{session_id}/table", response_model=TableResponse, status_code=status.HTTP_200_OK)
def get_table(session_id: str, lang: LanguageParam = None) -> TableResponse:
    session = _get_session(session_id, lang)
    return TableResponse(
        sessionId=session_id,
        totalDistance=session.response.totalDistance,
        status=session.response.status,
        rows=build_table_rows(session.controller),
    )


@router.get("/sessions/{session_id}/table.csv", status_code=status.HTTP_200_OK)
def get_table_csv(session_id: str, lang: LanguageParam = None) -> Response:
    session = _get_session(session_id, lang)
    content = table_rows_to_csv(build_table_rows(session.controller))
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="route_{session_id}.csv"'},
    )


@router.get("/sessions/{session_id}/map", response_class=HTMLResponse, status_code=status.HTTP_200_OK)
def get_map(session_id: str, lang: LanguageParam = None) -> HTMLResponse:
    session = _get_session(session_id, lang)
    try:
        return HTMLResponse(content=render_route_map(session.controller, _strings(lang)))
    except Exception as exc:
        logging.exception(f"Error rendering map for session {session_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to render map: {str(exc)}",
        ) from exc


@router.delete("/sessions/{session_id}", status_code=status.HTTP_200_OK)
def delete_session(session_id: str, lang: LanguageParam = None) -> dict:
    if not sessions.remove(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_strings(lang)["session_not_found"])
    return {"success": True, "message": f"Session {session_id} removed"}
