import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from fastapi import status

from faystar.adapters.interfaces.normalizer import ProviderRequest, RequestNormalizer
from faystar.adapters.provider_client import ProviderClient, ProviderResponse
from faystar.core.exceptions import ProviderCallError
from faystar.domain.schemas.envelope import ServiceEnvelope
from faystar.infrastructure.error.fallback import FallbackHandler, NoFallbackAvailable
from faystar.infrastructure.error.handler import ErrorClassification, ErrorHandler, ErrorKind
from faystar.services.response_adapter import ResponseAdapter

logger = logging.getLogger(__name__)

Shaper = Callable[[ProviderResponse, ProviderRequest], Dict[str, Any]]


@dataclass(frozen=True)
class ServiceResult:
    """An envelope plus the HTTP status it should be returned with."""
    status_code: int
    envelope: ServiceEnvelope

    @property
    def success(self) -> bool:
        return self.envelope.success


class ProviderBackedService:
    """
    Base for services that wrap one provider client.

    Runs the normalize, call, classify, adapt pipeline and guarantees exactly
    one envelope per inbound call. Provider failures never propagate; local
    validation failures do, as ValidationException.
    """

    def __init__(
        self,
        client: ProviderClient,
        error_handler: ErrorHandler,
        fallback_handler: Optional[FallbackHandler] = None,
    ):
        self.client = client
        self.error_handler = error_handler
        self.fallback_handler = fallback_handler

    @property
    def is_enabled(self) -> bool:
        return self.client.is_enabled

    async def _invoke(
        self,
        operation: str,
        normalizer: RequestNormalizer,
        request: Any,
        shape: Shaper,
        request_prefix: str = "api",
    ) -> ServiceResult:
        adapter = ResponseAdapter(request_prefix)
        provider_request = normalizer.normalize(request)

        if not self.client.is_enabled:
            logger.warning(
                f"{operation} refused: {self.client.name} client is disabled",
                extra={"operation": operation, "reason": self.client.credential_status},
            )
            classification = self.client.disabled_classification()
            return ServiceResult(classification.http_status, adapter.failure(classification, self.client.name))

        try:
            response = await self.client.call(
                provider_request.endpoint,
                provider_request.payload,
                method=provider_request.method,
                accept=provider_request.accept,
            )
        except Exception as e:
            classification = self.error_handler.handle_error(
                e,
                source=self.client.name,
                context={"operation": operation},
                classifier=self.client.classifier,
            )
            return self._fail(operation, provider_request, classification, adapter)

        try:
            data = shape(response, provider_request)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            classification = self.error_handler.handle_error(
                ProviderCallError(f"Unexpected {self.client.name} response shape: {e!r}"),
                source=self.client.name,
                context={"operation": operation},
                classifier=self.client.classifier,
            )
            return self._fail(operation, provider_request, classification, adapter)

        logger.info(
            f"{operation} completed",
            extra={"operation": operation, "provider": self.client.name},
        )
        return ServiceResult(status.HTTP_200_OK, adapter.success(data))

    def _fail(
        self,
        operation: str,
        provider_request: ProviderRequest,
        classification: ErrorClassification,
        adapter: ResponseAdapter,
    ) -> ServiceResult:
        params = dict(provider_request.payload or {})
        if (
            self.fallback_handler is not None
            and classification.kind != ErrorKind.SERVICE_DISABLED
            and self.fallback_handler.has_fallback(operation, params)
        ):
            try:
                data = self.fallback_handler.execute_fallback(operation, params, classification)
            except NoFallbackAvailable:
                pass
            else:
                return ServiceResult(status.HTTP_200_OK, adapter.success(data))

        return ServiceResult(classification.http_status, adapter.failure(classification, self.client.name))

    async def health(self) -> Dict[str, Any]:
        """Single-attempt probe of the provider."""
        result: Dict[str, Any] = {
            "provider": self.client.name,
            "enabled": self.client.is_enabled,
        }
        if not self.client.is_enabled:
            result.update(status="disabled", reason=self.client.credential_status)
            return result

        try:
            await self.client.probe()
        except Exception as e:
            classification = self.client.classifier.classify(e)
            logger.warning(
                f"{self.client.name} health probe failed: {classification.kind.value}",
                extra={"provider": self.client.name},
            )
            result.update(status="unhealthy", errorType=classification.kind.value)
            return result

        result["status"] = "healthy"
        return result
