"""
Generic HTTP client for external AI providers.

One instance per provider. The client guards its credential, sends one
logical request per call with a bounded retry on transient failures, and
reports failures as ProviderCallError for the error classifier.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)

from faystar.adapters.providers import ProviderConfig
from faystar.core.exceptions import ProviderCallError, ProviderDisabledError
from faystar.infrastructure.error.handler import ErrorClassification, ErrorClassifier, ErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderResponse:
    """Raw provider response, consumed immediately by a response adapter."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    def json(self) -> Any:
        return json.loads(self.content) if self.content else None


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, ProviderCallError) and error.retryable


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.content


class ProviderClient:
    """
    Client for one external provider, parameterised by ProviderConfig.

    A client whose credential is missing or malformed is constructed in a
    disabled state and refuses every call without network I/O.
    """

    def __init__(
        self,
        config: ProviderConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        classifier: Optional[ErrorClassifier] = None,
    ):
        """
        Initialize the provider client.

        Args:
            config: Provider configuration
            http_client: Optional HTTP client; built from the config when omitted
            classifier: Error classifier; built from the config's status table when omitted
        """
        self.config = config
        self.classifier = classifier or ErrorClassifier(config.status_table)
        self._http_client = http_client
        self._owns_http_client = http_client is None

        self._credential_problem: Optional[ErrorClassification] = self.classifier.classify_credential(
            config.credential, config.min_key_length
        )
        if self._credential_problem is not None:
            logger.warning(
                f"{config.name} client disabled: {self._credential_problem.kind.value}",
                extra={"provider": config.name, "env_var": config.credential_env_var},
            )
        else:
            logger.info(f"{config.name} client initialized", extra={"provider": config.name})

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def is_enabled(self) -> bool:
        return self._credential_problem is None

    @property
    def credential_status(self) -> str:
        """'valid', or the kind of credential problem that disabled the client."""
        if self._credential_problem is None:
            return "valid"
        return self._credential_problem.kind.value

    def disabled_classification(self) -> ErrorClassification:
        """SERVICE_DISABLED classification carrying the disabling reason."""
        return ErrorClassifier.for_kind(
            ErrorKind.SERVICE_DISABLED,
            {"provider": self.name, "reason": self.credential_status},
        )

    def get_config(self) -> Dict[str, Any]:
        """Configuration summary safe to expose; never includes the credential."""
        credential = self.config.credential or ""
        return {
            "provider": self.name,
            "baseUrl": self.config.base_url,
            "timeout": self.config.timeout,
            "maxRetries": self.config.max_retries,
            "retryDelay": self.config.retry_delay,
            "hasApiKey": bool(credential),
            "apiKeyLength": len(credential),
            "enabled": self.is_enabled,
            "credentialStatus": self.credential_status,
        }

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout))
        return self._http_client

    def _headers(self, accept: Optional[str]) -> Dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": accept or "application/json",
            **self.config.auth_headers(),
        }

    def _url(self, endpoint: str) -> str:
        return self.config.base_url.rstrip("/") + "/" + endpoint.lstrip("/")

    async def _send(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]],
        accept: Optional[str],
        timeout: float,
    ) -> ProviderResponse:
        try:
            response = await self.http_client.request(
                method,
                self._url(endpoint),
                json=payload if method.upper() != "GET" else None,
                headers=self._headers(accept),
                timeout=timeout,
            )
        except httpx.RequestError as e:
            raise ProviderCallError(
                f"{self.name} request to {endpoint} failed: {type(e).__name__}",
                cause=e,
            ) from e

        if response.status_code >= 400:
            raise ProviderCallError(
                f"{self.name} returned HTTP {response.status_code} for {endpoint}",
                status_code=response.status_code,
                body=_parse_body(response),
            )

        return ProviderResponse(
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            content=response.content,
        )

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"{self.name} call failed, retrying in {self.config.retry_delay:g}s: {error}",
            extra={"provider": self.name, "attempt": retry_state.attempt_number},
        )

    async def call(
        self,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
        method: str = "POST",
        accept: Optional[str] = None,
    ) -> ProviderResponse:
        """
        Perform one logical provider request.

        Network errors and 5xx responses are retried up to max_retries times
        after a fixed delay; 4xx responses are never retried.

        Args:
            endpoint: Path relative to the provider base URL
            payload: JSON body (ignored for GET)
            method: HTTP method
            accept: Accept header; JSON when omitted

        Returns:
            ProviderResponse: The successful response

        Raises:
            ProviderDisabledError: If the credential guard disabled this client
            ProviderCallError: If the final attempt failed
        """
        if not self.is_enabled:
            raise ProviderDisabledError(self.name, self.credential_status)

        attempt_number = 0
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.config.max_retries + 1),
            wait=wait_fixed(self.config.retry_delay),
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    attempt_number = attempt.retry_state.attempt_number
                    return await self._send(method, endpoint, payload, accept, self.config.timeout)
        except ProviderCallError as e:
            e.attempts = attempt_number
            raise

    async def probe(self) -> ProviderResponse:
        """
        Single-attempt health probe against the provider's health endpoint.

        Raises:
            ProviderDisabledError: If the credential guard disabled this client
            ProviderCallError: If the probe failed
        """
        if not self.is_enabled:
            raise ProviderDisabledError(self.name, self.credential_status)
        return await self._send("GET", self.config.health_endpoint, None, None, self.config.health_timeout)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
