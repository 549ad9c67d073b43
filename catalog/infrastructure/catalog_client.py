from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from catalog.config.settings import settings, split_endpoint
from catalog.domain.errors import CatalogError

logger = logging.getLogger(__name__)


class UpstreamError(CatalogError):
    """Raised when a catalog service call fails or cannot be made.

    ``status_code`` is ``None`` when the service could not be reached at all.
    ``payload`` holds the decoded error body the service returned, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class CatalogClient:
    """Minimal JSON client for a catalog service's RPC endpoints.

    Features:
    - Targets a ``host:port`` endpoint over plain HTTP.
    - Configurable timeout; calls are not retried.
    - Forwards the caller's request id as ``X-Request-ID``.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        host, port = split_endpoint(endpoint)
        self.base_url = f"http://{host}:{port}"
        self.timeout = float(timeout if timeout is not None else settings.upstream_timeout)

        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        if headers:
            self._session.headers.update(headers)

    def _full_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def call(
        self,
        path: str,
        payload: Mapping[str, Any],
        *,
        request_id: Optional[str] = None,
    ) -> Any:
        """POST ``payload`` to ``path`` and return the decoded JSON response.

        Raises UpstreamError on transport failures and non-2xx responses.
        """

        url = self._full_url(path)
        headers = {"X-Request-ID": request_id} if request_id else None
        try:
            resp = self._session.request(
                method="POST",
                url=url,
                json=dict(payload),
                headers=headers,
                timeout=self.timeout,
            )
        except (requests.Timeout, requests.ConnectionError) as exc:
            logger.warning(
                "CatalogClient POST %s exception: %s",
                url,
                type(exc).__name__,
                extra={"request_id": request_id},
            )
            raise UpstreamError(f"{url} unreachable: {exc}") from exc

        if 200 <= resp.status_code < 300:
            try:
                return resp.json()
            except ValueError as exc:
                raise UpstreamError(
                    f"{url} returned a non-JSON body", status_code=502
                ) from exc

        logger.warning(
            "CatalogClient POST %s failed with %s",
            url,
            resp.status_code,
            extra={"request_id": request_id},
        )
        raise UpstreamError(
            f"Upstream error {resp.status_code}: {resp.text[:200]}",
            status_code=resp.status_code,
            payload=_error_payload(resp),
        )


def _error_payload(resp: requests.Response) -> Optional[Mapping[str, Any]]:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, Mapping):
        return body
    return None
