"""Route optimization orchestration: validate, call the backend, open a viewing session."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from ...config import settings
from ...models.domain import GeometryRange, RouteResult, Stop
from ...persistence.filesystem import FileStorage
from ...schemas.routing import RouteRequest, RouteResponse
from ..i18n import get_translations
from ..outputs.routing_formatter import build_table_rows, table_rows_to_csv
from ..sessions import OptimizationSession, sessions
from ..viewport import ViewportController
from .client import OptimizerClient

logger = logging.getLogger(__name__)


class UploadError(ValueError):
    """The uploaded file is not a usable optimization request."""

    def __init__(self, message: str, *, unsupported_type: bool = False) -> None:
        super().__init__(message)
        self.unsupported_type = unsupported_type


def _validation_message(exc: ValidationError, strings: dict[str, str]) -> str:
    """Turn the first pydantic error into a localized, user-facing message."""
    error = exc.errors()[0]
    loc = error.get("loc", ())
    error_type = error.get("type", "")

    if len(loc) >= 2 and loc[0] == "customers" and isinstance(loc[1], int):
        prefix = f"{strings['customer']} {loc[1] + 1}: "
        if error_type == "missing":
            return prefix + strings["customer_fields_required"]
        if error_type == "value_error":
            return prefix + error.get("msg", strings["customer_data_types_incorrect"])
        return prefix + strings["customer_data_types_incorrect"]
    if loc == ("customers",) and error_type == "too_short":
        return strings["at_least_one_customer"]
    if loc == ("customers",) and error_type == "value_error":
        return error.get("msg", strings["incorrect_data_types"])
    if error_type == "missing":
        return strings["missing_required_fields"]
    return strings["incorrect_data_types"]


def parse_upload(filename: str | None, content: bytes, language: str | None = None) -> RouteRequest:
    """Validate an uploaded ``.json`` file into a request, raising :class:`UploadError` with a localized message."""
    strings = get_translations(language)
    if not filename or Path(filename).suffix.lower() != ".json":
        raise UploadError(strings["select_valid_json"], unsupported_type=True)

    try:
        data = json.loads(content.decode("utf-8-sig"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise UploadError(f"{strings['json_read_error']} {exc}") from exc

    try:
        return RouteRequest.model_validate(data)
    except ValidationError as exc:
        raise UploadError(f"{strings['json_read_error']} {_validation_message(exc, strings)}") from exc


def to_domain(request: RouteRequest, response: RouteResponse) -> tuple[tuple[float, float], list[Stop], RouteResult]:
    start = (request.startLatitude, request.startLongitude)
    stops = [Stop(stop_id=c.myId, latitude=c.latitude, longitude=c.longitude) for c in request.customers]

    geometry = None
    if response.routeGeometry is not None:
        geometry = [(point[0], point[1]) for point in response.routeGeometry]

    mapping = None
    if response.geometryMapping is not None:
        mapping = {
            stop_id: GeometryRange(start_index=rng.startIndex, end_index=rng.endIndex)
            for stop_id, rng in response.geometryMapping.items()
        }

    result = RouteResult(
        ordered_stop_ids=list(response.optimizedCustomerIds),
        total_distance=response.totalDistance,
        status=response.status,
        route_geometry=geometry,
        geometry_mapping=mapping,
    )
    return start, stops, result


def _persist(session: OptimizationSession) -> None:
    storage = FileStorage()
    run_dir = storage.make_run_directory(prefix="route")
    storage.write_json(
        run_dir / "summary.json",
        {
            "request": session.request.model_dump(),
            "result": session.response.model_dump(),
        },
    )
    storage.write_csv(run_dir / "stops.csv", table_rows_to_csv(build_table_rows(session.controller)))
    logger.info(f"Saved optimization outputs to {run_dir}")


def optimize_route(request: RouteRequest) -> tuple[str, OptimizationSession]:
    """Run one optimization and register the result for viewing."""
    try:
        client = OptimizerClient()
    except ValueError as e:
        logger.error(f"Optimizer client initialization failed: {e}")
        raise ConnectionError("Optimizer service is not configured. Please check ROUTEVIEW_OPTIMIZER_BASE_URL.") from e

    response = client.optimize(request)

    known_ids = {customer.myId for customer in request.customers}
    unknown = [stop_id for stop_id in response.optimizedCustomerIds if stop_id not in known_ids]
    if unknown:
        # Rendering skips these; the table and map simply leave them out.
        logger.warning(f"Optimizer returned {len(unknown)} ids that were not uploaded: {unknown[:10]}")

    start, stops, result = to_domain(request, response)
    controller = ViewportController(
        start=start,
        stops=stops,
        result=result,
        page_size=settings.viewport_page_size,
    )
    session = OptimizationSession(request=request, response=response, controller=controller)
    session_id = sessions.add(session)
    logger.info(
        f"Opened session {session_id}: {len(result.ordered_stop_ids)} stops, "
        f"geometry={'yes' if result.route_geometry else 'no'}, status={result.status}"
    )

    if settings.persist_outputs:
        try:
            _persist(session)
        except OSError as exc:
            # The result is still valid and viewable without the files.
            logger.warning(f"Failed to persist optimization outputs: {exc}")

    return session_id, session
