import json

import httpx
import pytest

from routeview.schemas.routing import RouteRequest
from routeview.services.optimizer import client as client_module
from routeview.services.optimizer.client import OptimizerAPIError, OptimizerClient

BASE_URL = "http://optimizer.test/api"


def _request() -> RouteRequest:
    return RouteRequest(
        startLatitude=41.0082,
        startLongitude=28.9784,
        customers=[
            {"myId": 101, "latitude": 41.0180, "longitude": 28.9647},
            {"myId": 102, "latitude": 41.0250, "longitude": 28.9740},
        ],
    )


def _client(handler, **kwargs) -> OptimizerClient:
    kwargs.setdefault("max_retries", 0)
    kwargs.setdefault("backoff_seconds", 0.0)
    return OptimizerClient(base_url=BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


def test_optimize_posts_payload_and_parses_response():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "optimizedCustomerIds": [102, 101],
                "totalDistance": "3.2 km",
                "status": "OPTIMIZED",
                "routeGeometry": [[28.9784, 41.0082], [28.974, 41.025], [28.9647, 41.018]],
                "geometryMapping": {"102": [0, 1], "101": {"startIndex": 1, "endIndex": 2}},
            },
        )

    response = _client(handler).optimize(_request())

    assert seen["path"] == "/api/route/optimize"
    assert seen["body"]["startLatitude"] == 41.0082
    assert [c["myId"] for c in seen["body"]["customers"]] == [101, 102]
    assert response.optimizedCustomerIds == [102, 101]
    assert response.geometryMapping[102].endIndex == 1
    assert response.geometryMapping[101].startIndex == 1


def test_numeric_total_distance_is_kept_as_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"optimizedCustomerIds": [101], "totalDistance": 12.5, "status": "OK"})

    response = _client(handler).optimize(_request())

    assert response.totalDistance == "12.5"
    assert response.routeGeometry is None
    assert response.geometryMapping is None


def test_client_error_surfaces_backend_message_without_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(400, json={"message": "Invalid coordinates"})

    with pytest.raises(OptimizerAPIError) as excinfo:
        _client(handler, max_retries=3).optimize(_request())

    assert str(excinfo.value) == "API Error: Invalid coordinates"
    assert excinfo.value.status_code == 400
    assert len(calls) == 1


def test_server_error_is_retried():
    responses = iter(
        [
            httpx.Response(503, text="busy"),
            httpx.Response(200, json={"optimizedCustomerIds": [101, 102], "totalDistance": "1 km", "status": "OK"}),
        ]
    )

    def handler(request: httpx.Request) -> httpx.Response:
        return next(responses)

    response = _client(handler, max_retries=1).optimize(_request())

    assert response.optimizedCustomerIds == [101, 102]


def test_connection_failure_becomes_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ConnectionError):
        _client(handler).optimize(_request())


def test_unexpected_response_shape_is_an_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": "OK"})

    with pytest.raises(OptimizerAPIError) as excinfo:
        _client(handler).optimize(_request())

    assert str(excinfo.value).startswith("API Error: unexpected response format")


def test_missing_base_url_is_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(client_module.settings, "optimizer_base_url", None)

    with pytest.raises(ValueError):
        OptimizerClient()


def test_connect_timeout_is_retried_then_raised():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectTimeout("connect timed out", request=request)

    with pytest.raises(httpx.ConnectTimeout):
        _client(handler, max_retries=2).optimize(_request())

    assert len(calls) == 3


def test_read_timeout_is_not_resent():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(httpx.ReadTimeout):
        _client(handler, max_retries=2).optimize(_request())

    assert len(calls) == 1


def test_protocol_error_becomes_connection_error_after_retries():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.RemoteProtocolError("server disconnected", request=request)

    with pytest.raises(ConnectionError):
        _client(handler, max_retries=1).optimize(_request())

    assert len(calls) == 2
