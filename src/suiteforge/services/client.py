"""Authenticated API client with outcome classification and retry.

This module provides:
- AuthenticatedClient for making credentialed HTTP requests that resolve
  to RequestOutcome values instead of raising
- classify_response for mapping an httpx.Response into the outcome taxonomy
"""

from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Any

import httpx

from suiteforge.config.settings import Settings
from suiteforge.core.exceptions import RequestFailedError
from suiteforge.models.client_config import ClientConfig
from suiteforge.models.credential import Credential
from suiteforge.models.outcome import (
    ClientError,
    RequestOutcome,
    ServerError,
    Success,
    TransportFailure,
)
from suiteforge.services.credentials import SettingsCredentialSource
from suiteforge.services.reporting import RequestReporter, StructlogReporter

AUTH_HEADERS = ("Authorization", "Proxy-Authorization")
CANCELLED_CAUSE = "cancelled"


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


def _error_message(response: httpx.Response, body: Any) -> str:
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            if body.get(key):
                return str(body[key])
    if isinstance(body, str) and body.strip():
        return body.strip()[:500]
    return response.reason_phrase


def classify_response(response: httpx.Response) -> RequestOutcome:
    """Map an HTTP response into Success, ClientError or ServerError."""
    body = _decode_body(response)
    status = response.status_code

    if status >= 500:
        return ServerError(status=status, message=_error_message(response, body))
    if status >= 400:
        return ClientError(status=status, message=_error_message(response, body))
    return Success(status=status, body=body)


class AuthenticatedClient:
    """HTTP client that injects a credential and classifies every response.

    Provides:
    - Injected or lazily created httpx.AsyncClient transport
    - Exactly one auth header (Authorization or Proxy-Authorization) per request
    - Retry with capped exponential backoff for ServerError/TransportFailure
      on idempotent calls only
    - Cooperative cancellation through an asyncio.Event
    - Events sent to an injected reporter instead of hardcoded logging

    Attributes:
        config: Base URL and retry policy.
        credential: Default credential, overridable per request.
        reporter: Receiver of request events.

    Example:
        config = ClientConfig(base_url="https://api.example.com")
        async with AuthenticatedClient(config, credential=Credential.bearer("token")) as client:
            outcome = await client.get("/users/1")
            if outcome.ok:
                print(outcome.body)
    """

    def __init__(
        self,
        config: ClientConfig,
        credential: Credential | None = None,
        transport: httpx.AsyncClient | None = None,
        reporter: RequestReporter | None = None,
    ) -> None:
        """Initialize AuthenticatedClient.

        Args:
            config: Base URL and retry policy.
            credential: Default credential for every request.
            transport: Pre-built httpx.AsyncClient. The caller keeps ownership
                and must close it; when omitted, one is created on first use
                and closed by close().
            reporter: Event receiver (default: StructlogReporter).
        """
        self.config = config
        self.credential = credential
        self.reporter: RequestReporter = reporter or StructlogReporter()
        self._client = transport
        self._owns_client = transport is None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncClient | None = None,
        reporter: RequestReporter | None = None,
    ) -> AuthenticatedClient:
        """Create a client from environment settings.

        The credential is taken from SUITEFORGE_API_TOKEN when set;
        otherwise requests are sent without an auth header.
        """
        credential = None
        if settings.api_token is not None:
            credential = SettingsCredentialSource(settings).get_credential()
        return cls(
            ClientConfig.from_settings(settings),
            credential=credential,
            transport=transport,
            reporter=reporter,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout_seconds,
            )
            self.reporter.report("httpx_client_created", base_url=self.config.base_url)
        return self._client

    async def close(self) -> None:
        """Close the httpx client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            self.reporter.report("httpx_client_closed", base_url=self.config.base_url)

    async def __aenter__(self) -> AuthenticatedClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _build_request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        body: Any,
        credential: Credential | None,
    ) -> httpx.Request:
        kwargs: dict[str, Any] = {}
        if isinstance(body, (str, bytes)):
            kwargs["content"] = body
        elif body is not None:
            kwargs["json"] = body

        request = client.build_request(method, path, **kwargs)

        # Transport defaults may carry an auth header; only ours may remain
        for header in AUTH_HEADERS:
            request.headers.pop(header, None)
        if credential is not None:
            request.headers[credential.header] = credential.header_value()
        return request

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        body: Any,
        credential: Credential | None,
    ) -> RequestOutcome:
        request = self._build_request(client, method, path, body, credential)
        try:
            response = await client.send(request)
        except (httpx.TimeoutException, httpx.RequestError) as e:
            return TransportFailure(cause=f"{type(e).__name__}: {e}")
        return classify_response(response)

    async def _backoff(self, seconds: float, cancel_event: asyncio.Event | None) -> bool:
        """Wait before the next attempt.

        Returns:
            True if cancel_event was set during the wait.
        """
        if cancel_event is None:
            await asyncio.sleep(seconds)
            return False
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True

    def _cancelled(self, method: str, path: str, attempts: int) -> TransportFailure:
        self.reporter.report("request_cancelled", method=method, path=path, attempts=attempts)
        return TransportFailure(
            cause=CANCELLED_CAUSE,
            cancelled=True,
            method=method,
            path=path,
            attempts=attempts,
        )

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        credential: Credential | None = None,
        *,
        idempotent: bool | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> RequestOutcome:
        """Make an HTTP request and classify the result.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, ...).
            path: Request path (joined to config.base_url).
            body: JSON-serializable payload, or str/bytes sent as-is.
            credential: Overrides the client's default credential.
            idempotent: Whether the call may be retried. None means "retry
                if the method is in config.idempotent_methods"; pass True to
                opt a POST into retries.
            cancel_event: Checked before each attempt and raced against each
                backoff delay; once set, pending retries are abandoned and a
                cancelled TransportFailure is returned. An attempt already in
                flight is not interrupted and is bounded only by
                config.timeout_seconds.

        Returns:
            Success, ClientError, ServerError or TransportFailure. Never raises
            for HTTP or transport failures.
        """
        method = method.upper()
        credential = credential or self.credential
        retry_allowed = self.config.is_idempotent(method) if idempotent is None else idempotent
        max_attempts = self.config.max_attempts if retry_allowed else 1

        client = await self._get_client()
        attempt = 0

        while True:
            if cancel_event is not None and cancel_event.is_set():
                return self._cancelled(method, path, attempt)

            attempt += 1
            self.reporter.report(
                "request_attempt",
                method=method,
                path=path,
                attempt=attempt,
                max_attempts=max_attempts,
            )
            outcome = await self._attempt(client, method, path, body, credential)
            outcome = outcome.model_copy(update={"method": method, "path": path, "attempts": attempt})

            if isinstance(outcome, Success):
                self.reporter.report(
                    "request_succeeded", method=method, path=path, status=outcome.status, attempt=attempt
                )
                return outcome

            if isinstance(outcome, ClientError):
                # 4xx is a caller bug or invalid state - surface immediately
                self.reporter.report(
                    "request_client_error",
                    method=method,
                    path=path,
                    status_code=outcome.status,
                    error=outcome.message,
                )
                return outcome

            if isinstance(outcome, ServerError):
                self.reporter.report(
                    "request_server_error",
                    method=method,
                    path=path,
                    status_code=outcome.status,
                    attempt=attempt,
                    max_attempts=max_attempts,
                )
            else:
                self.reporter.report(
                    "request_transport_failure",
                    method=method,
                    path=path,
                    error=outcome.cause,
                    attempt=attempt,
                    max_attempts=max_attempts,
                )

            if attempt >= max_attempts:
                if max_attempts > 1:
                    self.reporter.report(
                        "request_retries_exhausted",
                        method=method,
                        path=path,
                        max_attempts=max_attempts,
                    )
                return outcome

            delay = self.config.backoff_seconds(attempt - 1)
            self.reporter.report("request_retry_backoff", method=method, path=path, seconds=delay)
            if await self._backoff(delay, cancel_event):
                return self._cancelled(method, path, attempt)

    async def send(
        self,
        method: str,
        path: str,
        body: Any = None,
        credential: Credential | None = None,
        **kwargs: Any,
    ) -> Success:
        """Make a request and raise unless it succeeded.

        Raises:
            RequestFailedError: For ClientError, ServerError or TransportFailure.
        """
        outcome = await self.request(method, path, body, credential, **kwargs)
        if not isinstance(outcome, Success):
            raise RequestFailedError(outcome)
        return outcome

    async def get(self, path: str, **kwargs: Any) -> RequestOutcome:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, body: Any = None, **kwargs: Any) -> RequestOutcome:
        return await self.request("POST", path, body, **kwargs)

    async def put(self, path: str, body: Any = None, **kwargs: Any) -> RequestOutcome:
        return await self.request("PUT", path, body, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> RequestOutcome:
        return await self.request("DELETE", path, **kwargs)
