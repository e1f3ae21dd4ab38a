"""Submit effect posting form values to an HTTP endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from schemaforms import logger
from schemaforms.exceptions import SubmitTransportError
from schemaforms.settings import build_httpx_client_kwargs, get_settings

if TYPE_CHECKING:
    from schemaforms.settings import Settings


class HttpSubmitEffect:
    """POST validated values as a JSON object to a fixed URL."""

    def __init__(
        self,
        url: str | None = None,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the effect.

        Args:
            url (str | None): Target URL, defaults to `SUBMIT_URL`.
            settings (Settings | None): Runtime settings, defaults to `get_settings()`.
            client (httpx.AsyncClient | None): Client to reuse; a short-lived one is built otherwise.

        Raises:
            SubmitTransportError: If no URL is configured.
        """
        self._settings = settings or get_settings()
        target = url or self._settings.submit_url
        if not target:
            raise SubmitTransportError(message="SUBMIT_URL is required for HTTP submission")
        self._url = target
        self._client = client

    @property
    def url(self) -> str:
        """Return the target URL."""
        return self._url

    async def __call__(self, values: dict[str, str]) -> None:
        """Send values to the endpoint.

        Args:
            values (dict[str, str]): Validated form values.

        Raises:
            SubmitTransportError: If the request fails or the endpoint rejects it.
        """
        if self._client is not None:
            await self._post(self._client, values)
            return
        async with httpx.AsyncClient(**build_httpx_client_kwargs(self._settings)) as client:
            await self._post(client, values)

    async def _post(self, client: httpx.AsyncClient, values: dict[str, str]) -> None:
        try:
            response = await client.post(self._url, json=values)
        except httpx.TimeoutException as exc:
            raise SubmitTransportError(message="Submit request timed out") from exc
        except httpx.HTTPError as exc:
            raise SubmitTransportError(message=f"Submit request failed: {exc}") from exc

        if response.is_error:
            raise SubmitTransportError(
                message=f"Submit request failed with status {response.status_code}",
                status_code=response.status_code,
            )
        logger.info("Form values posted", extra={"url": self._url, "status_code": response.status_code})
