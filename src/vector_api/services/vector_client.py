from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable
from urllib.parse import quote

import httpx

from vector_api.core.errors import (
    ConfigurationError,
    MissingTokenError,
    PayloadDecodeError,
    PollTimeoutError,
    TransportError,
)
from vector_api.schemas.vectors import VectorResult, VectorStatus
from vector_api.services.envelope import load_result
from vector_api.settings import ApiSettings, get_settings

logger = logging.getLogger("vector_api.client")

UPLOAD_PATH = "/api/vectors/upload"
STATUS_PATH = "/api/vectors/status/{token}"
RESULTS_PATH = "/api/vectors/results/{token}"


class VectorClient:
    """Upload PDFs to the vector extraction service and fetch decoded results.

    An ``http_client`` may be supplied (its base URL is then the caller's
    responsibility and it is left open and unmodified); otherwise one is built
    from the settings and closed together with this client. The API key is
    sent as a per-request header.
    """

    def __init__(self, settings: ApiSettings | None = None, http_client: httpx.Client | None = None) -> None:
        self.settings = settings or get_settings()
        if not self.settings.API_KEY:
            raise ConfigurationError(
                code="not_configured",
                message="Vector API not configured",
                details={"hint": "Set the API_KEY environment variable."},
            )
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.Client(
                base_url=self.settings.base_url,
                timeout=self.settings.VECTOR_API_TIMEOUT_S,
            )
        self._headers = {"X-Api-Key": self.settings.API_KEY}
        self.http = http_client

    def __enter__(self) -> "VectorClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self.http.request(method, path, headers=self._headers, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(
                code="transport_unreachable",
                message=f"Request to {path} failed",
                details={"error": exc.__class__.__name__, "reason": str(exc)},
            ) from exc
        if response.status_code != 200:
            logger.warning("vector api %s %s returned status=%s", method, path, response.status_code)
            raise TransportError(
                code="transport_error",
                message=f"Got non-success error code {response.status_code} with body: {response.text}",
                status_code=response.status_code,
                details={"path": path, "body": response.text},
            )
        return response

    def upload_pdf(self, pdf_path: str | Path) -> str:
        path = Path(pdf_path)
        with path.open("rb") as handle:
            response = self._request(
                "POST",
                UPLOAD_PATH,
                files={"file": (path.name, handle, "application/pdf")},
            )
        try:
            payload = response.json()
        except ValueError:
            payload = None
        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str):
            raise MissingTokenError(
                code="missing_token",
                message="Did not receive token from server.",
                status_code=response.status_code,
                details={"body": response.text},
            )
        logger.info("vector upload accepted file=%s token=%s", path.name, token)
        return token

    def get_status(self, token: str) -> VectorStatus:
        response = self._request("GET", STATUS_PATH.format(token=quote(token, safe="")))
        try:
            return VectorStatus.model_validate(response.json())
        except ValueError as exc:
            raise PayloadDecodeError(
                code="payload_decode_error",
                message="Status response is not a valid status object",
                status_code=response.status_code,
                details={"error": exc.__class__.__name__, "body": response.text},
            ) from exc

    def get_data(self, token: str) -> VectorResult:
        response = self._request("GET", RESULTS_PATH.format(token=quote(token, safe="")))
        return load_result(response.content, self.settings.VECTOR_API_PATH_REVISION)

    def wait_for_result(
        self,
        token: str,
        poll_interval: float | None = None,
        timeout: float | None = None,
        on_progress: Callable[[VectorStatus], None] | None = None,
    ) -> VectorResult:
        interval = poll_interval if poll_interval is not None else self.settings.VECTOR_API_POLL_INTERVAL_S
        deadline = time.monotonic() + timeout if timeout is not None else None
        while True:
            time.sleep(interval)
            status = self.get_status(token)
            logger.debug("vector status token=%s ready=%s progress=%s", token, status.ready, status.progress)
            if on_progress is not None:
                on_progress(status)
            if status.ready:
                return self.get_data(token)
            if deadline is not None and time.monotonic() >= deadline:
                raise PollTimeoutError(
                    code="poll_timeout",
                    message=f"Result for token {token} was not ready after {timeout}s",
                    details={"token": token, "progress": status.progress},
                )


def upload_pdf(settings: ApiSettings, pdf_path: str | Path) -> str:
    with VectorClient(settings) as client:
        return client.upload_pdf(pdf_path)


def get_status(settings: ApiSettings, token: str) -> VectorStatus:
    with VectorClient(settings) as client:
        return client.get_status(token)


def get_data(settings: ApiSettings, token: str) -> VectorResult:
    with VectorClient(settings) as client:
        return client.get_data(token)
