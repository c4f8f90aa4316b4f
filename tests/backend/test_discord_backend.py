import json

import httpx
import pytest

from wbh_shell.backend.discord import DiscordWebhookBackend
from wbh_shell.errors import (
    BackendError,
    ResourceNotFoundError,
    UnauthorizedError,
    UnsupportedActionError,
)

URL = "https://discord.com/api/webhooks/1/token"


def make_backend(handler):
    """Builds a backend whose requests are answered by `handler`."""
    requests = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    backend = DiscordWebhookBackend(
        timeout=1.0, transport=httpx.MockTransport(recording_handler)
    )
    return backend, requests


@pytest.mark.asyncio
async def test_connect_returns_resource_info():
    backend, requests = make_backend(
        lambda request: httpx.Response(
            200, json={"id": "1", "name": "Release Bot", "channel_id": "424242"}
        )
    )
    async with backend:
        info = await backend.connect(URL)

    assert info.display_name == "Release Bot"
    assert info.location_id == "424242"
    assert requests[0].method == "GET"
    assert str(requests[0].url) == URL


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, error_type",
    [(404, ResourceNotFoundError), (401, UnauthorizedError), (500, BackendError)],
)
async def test_connect_maps_status_codes(status, error_type):
    backend, _ = make_backend(lambda request: httpx.Response(status, text="nope"))
    async with backend:
        with pytest.raises(error_type) as exc_info:
            await backend.connect(URL)

    assert exc_info.value.status == status
    assert exc_info.value.body == "nope"


@pytest.mark.asyncio
async def test_connect_with_unreadable_body_is_a_backend_error():
    backend, _ = make_backend(lambda request: httpx.Response(200, text="<html>"))
    async with backend:
        with pytest.raises(BackendError) as exc_info:
            await backend.connect(URL)

    assert exc_info.value.status == 200


@pytest.mark.asyncio
async def test_connect_with_missing_fields_is_a_backend_error():
    backend, _ = make_backend(lambda request: httpx.Response(200, json={"id": "1"}))
    async with backend:
        with pytest.raises(BackendError):
            await backend.connect(URL)


@pytest.mark.asyncio
async def test_transport_failure_becomes_backend_error():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    backend, _ = make_backend(handler)
    async with backend:
        with pytest.raises(BackendError) as exc_info:
            await backend.connect(URL)

    assert exc_info.value.status is None
    assert "timed out" in exc_info.value.body


@pytest.mark.asyncio
async def test_send_posts_content():
    backend, requests = make_backend(lambda request: httpx.Response(204))
    async with backend:
        await backend.invoke(URL, "send", "Hello chat")

    assert requests[0].method == "POST"
    assert json.loads(requests[0].content) == {"content": "Hello chat"}
    assert requests[0].headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_send_unexpected_status_raises():
    backend, _ = make_backend(
        lambda request: httpx.Response(400, json={"message": "Cannot send an empty message"})
    )
    async with backend:
        with pytest.raises(BackendError) as exc_info:
            await backend.invoke(URL, "send", "x")

    assert exc_info.value.status == 400
    assert "Cannot send an empty message" in exc_info.value.body


@pytest.mark.asyncio
async def test_rename_patches_name():
    backend, requests = make_backend(
        lambda request: httpx.Response(200, json={"name": "Deploy Bot"})
    )
    async with backend:
        await backend.invoke(URL, "rename", "Deploy Bot")

    assert requests[0].method == "PATCH"
    assert json.loads(requests[0].content) == {"name": "Deploy Bot"}


@pytest.mark.asyncio
async def test_rename_expects_ok_status():
    backend, _ = make_backend(lambda request: httpx.Response(204))
    async with backend:
        with pytest.raises(BackendError):
            await backend.invoke(URL, "rename", "Deploy Bot")


@pytest.mark.asyncio
async def test_unknown_action_makes_no_request():
    backend, requests = make_backend(lambda request: httpx.Response(204))
    async with backend:
        with pytest.raises(UnsupportedActionError):
            await backend.invoke(URL, "archive", "x")

    assert requests == []


@pytest.mark.asyncio
async def test_disconnect_deletes():
    backend, requests = make_backend(lambda request: httpx.Response(204))
    async with backend:
        await backend.disconnect(URL)

    assert requests[0].method == "DELETE"


@pytest.mark.asyncio
async def test_disconnect_failure_raises():
    backend, _ = make_backend(lambda request: httpx.Response(404, text="Unknown Webhook"))
    async with backend:
        with pytest.raises(BackendError) as exc_info:
            await backend.disconnect(URL)

    assert exc_info.value.status == 404


@pytest.mark.asyncio
async def test_backend_closes_client_on_exit():
    backend, _ = make_backend(lambda request: httpx.Response(204))
    async with backend:
        pass

    assert backend.client.is_closed
