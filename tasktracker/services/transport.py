import logging

import httpx

from tasktracker.config import settings
from tasktracker.exceptions import ConnectivityError, NotFoundError, TaskTrackerError, ValidationError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "API request failed."


def error_message(response: httpx.Response) -> str:
    """Message carried by an error response: its `erro` field, else the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or GENERIC_ERROR
    if isinstance(body, dict):
        message = body.get("erro") or body.get("message")
        if message:
            return str(message)
    return response.text.strip() or GENERIC_ERROR


def error_for(response: httpx.Response) -> TaskTrackerError:
    message = error_message(response)
    if response.status_code == 400:
        return ValidationError(message)
    if response.status_code == 404:
        return NotFoundError(message)
    return ConnectivityError(message)


class ApiClient:
    """
    JSON client for the task REST API.

    Every call is one self-contained request; there are no retries.
    `transport` lets callers plug an in-process app or a mock.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_URL,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
            transport=transport,
            headers={"Content-Type": "application/json; charset=UTF-8"},
        )

    async def request(self, method: str, path: str, json=None):
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ConnectivityError(f"Could not reach the API at {self._client.base_url}.") from exc

        if response.is_error:
            error = error_for(response)
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, error.message)
            raise error
        return response.json()

    async def get(self, path: str):
        return await self.request("GET", path)

    async def post(self, path: str, json):
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json):
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str):
        return await self.request("DELETE", path)

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
