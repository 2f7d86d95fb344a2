"""StoreAPIClient against httpx.MockTransport."""

import httpx
import pytest

from plantgenius.shared.core.exceptions import APIError, ExternalServiceError, NotFoundError
from plantgenius.shared.infrastructure.api_client import StoreAPIClient, extract_error_message


def make_client(handler, max_retries=1):
    return StoreAPIClient(
        base_url="https://api.plantgenius.test",
        max_retries=max_retries,
        transport=httpx.MockTransport(handler),
    )


async def test_returns_decoded_json_and_sends_bearer_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["path"] = request.url.path
        return httpx.Response(200, json={"ok": True})

    client = make_client(handler)
    client.set_access_token("tok")

    assert await client.get("/users/u1") == {"ok": True}
    assert seen == {"auth": "Bearer tok", "path": "/users/u1"}
    await client.aclose()


async def test_no_authorization_header_without_token():
    def handler(request):
        assert "Authorization" not in request.headers
        return httpx.Response(204)

    client = make_client(handler)
    assert await client.post("/scans/u1/2026-10-19/increment") is None
    await client.aclose()


async def test_error_message_taken_from_body():
    client = make_client(lambda request: httpx.Response(400, json={"error": "planType is required"}))

    with pytest.raises(APIError) as exc_info:
        await client.post("/subscriptions", {})

    assert exc_info.value.message == "planType is required"
    assert exc_info.value.status_code == 400
    await client.aclose()


async def test_error_message_falls_back_to_status():
    client = make_client(lambda request: httpx.Response(500, text="<html>oops</html>"))

    with pytest.raises(APIError) as exc_info:
        await client.get("/users/u1")

    assert exc_info.value.message == "API Error: 500"
    await client.aclose()


async def test_not_found_raises_not_found_error():
    client = make_client(lambda request: httpx.Response(404, json={"message": "User not found"}))

    with pytest.raises(NotFoundError):
        await client.get("/users/missing")
    await client.aclose()


async def test_transport_errors_are_retried_then_wrapped():
    attempts = []

    def handler(request):
        attempts.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler, max_retries=2)

    with pytest.raises(ExternalServiceError):
        await client.get("/users/u1")

    assert len(attempts) == 2
    await client.aclose()


def test_extract_error_message_prefers_message_over_error():
    response = httpx.Response(422, json={"message": "Invalid date", "error": "Unprocessable"})
    assert extract_error_message(response) == "Invalid date"
