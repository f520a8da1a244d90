import pytest
from starlette.requests import Request

from api.routes.nylas.body import capture_raw_body
from utils.errors import PayloadTooLargeError


def _build_request(body: bytes, headers: list[tuple[bytes, bytes]] | None = None) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/webhook/nylas",
        "raw_path": b"/webhook/nylas",
        "query_string": b"",
        "headers": headers or [],
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


@pytest.mark.asyncio
async def test_returns_exact_bytes() -> None:
    body = b'{ "type" : "message.created" }\n'

    assert await capture_raw_body(_build_request(body), 1024) == body


@pytest.mark.asyncio
async def test_declared_length_over_limit() -> None:
    request = _build_request(b"{}", [(b"content-length", b"2048")])

    with pytest.raises(PayloadTooLargeError, match="declared"):
        await capture_raw_body(request, 1024)


@pytest.mark.asyncio
async def test_actual_length_over_limit() -> None:
    with pytest.raises(PayloadTooLargeError, match="received"):
        await capture_raw_body(_build_request(b"x" * 20), 10)


@pytest.mark.asyncio
async def test_consumed_stream_returns_none() -> None:
    request = _build_request(b"{}")
    async for _ in request.stream():
        pass

    assert await capture_raw_body(request, 1024) is None


@pytest.mark.asyncio
async def test_chunked_body_stops_reading_at_limit() -> None:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/pubsub/nylas",
        "raw_path": b"/pubsub/nylas",
        "query_string": b"",
        "headers": [(b"transfer-encoding", b"chunked")],
    }
    pulled: list[int] = []

    async def _receive() -> dict[str, object]:
        pulled.append(1)
        return {"type": "http.request", "body": b"x" * 1000, "more_body": len(pulled) < 100}

    with pytest.raises(PayloadTooLargeError, match="received"):
        await capture_raw_body(Request(scope, _receive), 4000)

    assert len(pulled) == 5


@pytest.mark.asyncio
async def test_chunked_body_within_limit_is_joined() -> None:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/webhook/nylas",
        "raw_path": b"/webhook/nylas",
        "query_string": b"",
        "headers": [],
    }
    parts = [b'{"type":', b'"message.created"}']

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": parts.pop(0), "more_body": bool(parts)}

    raw_body = await capture_raw_body(Request(scope, _receive), 1024)

    assert raw_body == b'{"type":"message.created"}'
