"""HttpCategorySource — fetches the message category list from the BlueBoxy API."""

import httpx
from pydantic import BaseModel, ValidationError

from blueboxy.messaging.domain.message import MessageCategory
from blueboxy.remote.domain.classifier import classify_status, retry_after_from_headers
from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.domain.errors import RemoteCallError

CATEGORIES_PATH = "/api/messages/categories"


class CategoriesResponse(BaseModel, frozen=True):
    categories: list[MessageCategory]
    success: bool = True


class HttpCategorySource:
    """CategorySource that GETs ``<base_url>/api/messages/categories``.

    One request per call and no retries of its own; every failure is raised
    as a classified RemoteCallError for the executor to act on.

    Satisfies the CategorySource protocol structurally.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = base_url.rstrip("/") + CATEGORIES_PATH
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def list_categories(self) -> list[MessageCategory]:
        """Fetch and decode the category list.

        Raises:
            RemoteCallError: CONNECTIVITY when the server cannot be reached,
                the status-derived kind for a non-2xx response, DECODING for a
                body that does not parse, SERVER_ERROR when the body reports
                ``success: false``.
        """
        async with httpx.AsyncClient(
            timeout=self._timeout_seconds, transport=self._transport
        ) as client:
            try:
                response = await client.get(
                    self._url, headers={"Accept": "application/json"}
                )
            except httpx.TransportError as exc:
                raise RemoteCallError(
                    kind=ErrorKind.CONNECTIVITY,
                    reason=f"Failed to reach {self._url}: {exc}",
                ) from exc

        if not response.is_success:
            raise classify_status(
                status_code=response.status_code,
                reason=f"Failed to fetch categories: HTTP {response.status_code}",
                retry_after_seconds=retry_after_from_headers(response.headers),
            )

        try:
            payload = CategoriesResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise RemoteCallError(
                kind=ErrorKind.DECODING,
                reason=f"Failed to decode categories: {exc.error_count()} invalid field(s)",
            ) from exc

        if not payload.success:
            raise RemoteCallError(
                kind=ErrorKind.SERVER_ERROR,
                reason="Failed to fetch categories: server reported failure",
            )
        return payload.categories
