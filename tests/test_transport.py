import json

import httpx
import pytest

from tasktracker.exceptions import ConnectivityError, NotFoundError, ValidationError
from tasktracker.services.transport import GENERIC_ERROR, ApiClient


def client_answering(status_code, **response_kwargs) -> ApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, **response_kwargs)

    return ApiClient(base_url="http://api.test", transport=httpx.MockTransport(handler))


async def test_sends_utf8_json():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": 1})

    async with ApiClient(base_url="http://api.test", transport=httpx.MockTransport(handler)) as client:
        body = await client.post("/users", json={"nome": "João", "telefone": "11999998888"})

    assert body == {"id": 1}
    [request] = seen
    assert request.method == "POST"
    assert request.url.path == "/users"
    assert request.headers["content-type"] == "application/json; charset=UTF-8"
    assert json.loads(request.content.decode("utf-8"))["nome"] == "João"


@pytest.mark.parametrize("status_code, error", [
    (400, ValidationError),
    (404, NotFoundError),
    (500, ConnectivityError),
    (503, ConnectivityError),
])
async def test_error_status_maps_to_exception(status_code, error):
    async with client_answering(status_code, json={"erro": "Something went wrong."}) as client:
        with pytest.raises(error) as excinfo:
            await client.get("/tasks")

    assert excinfo.value.message == "Something went wrong."


async def test_message_field_is_used_when_erro_is_missing():
    async with client_answering(400, json={"message": "Bad input."}) as client:
        with pytest.raises(ValidationError, match="Bad input."):
            await client.get("/tasks")


async def test_plain_text_error_is_surfaced():
    async with client_answering(500, text="Gateway exploded") as client:
        with pytest.raises(ConnectivityError, match="Gateway exploded"):
            await client.get("/tasks")


async def test_empty_error_body_falls_back_to_generic_message():
    async with client_answering(500) as client:
        with pytest.raises(ConnectivityError) as excinfo:
            await client.get("/tasks")

    assert excinfo.value.message == GENERIC_ERROR


async def test_unreachable_server_raises_connectivity_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    async with ApiClient(base_url="http://api.test", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ConnectivityError):
            await client.get("/tasks")
