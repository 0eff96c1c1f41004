"""
Shared plumbing for the service clients.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from config.constants import UPLOAD_FIELD_NAME
from config.settings import settings


class ServiceClient:
    """
    Base class for clients of the analysis backend.

    Args:
        base_url: Backend root URL. Defaults to settings.api_base_url.
        timeout: Request timeout in seconds. Defaults to settings.request_timeout.
        http_client: Existing httpx.AsyncClient to reuse. When None, a
            client is opened and closed per request.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._http_client = http_client

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @asynccontextmanager
    async def session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as client:
            yield client

    async def post_file(
        self,
        path: str,
        data: bytes,
        filename: str,
        content_type: str = "application/octet-stream",
    ) -> httpx.Response:
        """POST one file as multipart form data and return the raw response."""
        async with self.session() as client:
            return await client.post(
                self.url_for(path),
                files={UPLOAD_FIELD_NAME: (filename, data, content_type)},
            )


def error_detail(response: httpx.Response) -> Optional[str]:
    """Pull a `detail` message out of an error response, if there is one."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] or None
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error")
        return str(detail) if detail else None
    return None
