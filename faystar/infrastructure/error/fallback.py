"""
Fallback mechanism for provider-backed operations.
Lets an operation degrade gracefully when its provider call fails.
"""
from typing import Any, Dict, List, Optional
import json
import logging

from faystar.adapters.interfaces.fallback import FallbackStrategy
from faystar.infrastructure.error.handler import ErrorClassification


class NoFallbackAvailable(LookupError):
    """Raised when no registered strategy could produce fallback data."""


class FallbackHandler:
    """
    Registry of fallback strategies keyed by operation, tried highest
    priority first.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize the fallback handler.

        Args:
            logger: Logger instance for fallback operations
        """
        self.logger = logger
        self._registry: Dict[str, List[FallbackStrategy]] = {}

    def register_fallback(self, operation_key: str, strategy: FallbackStrategy) -> None:
        """
        Register a fallback strategy for a specific operation.

        Args:
            operation_key: Unique identifier for the operation
            strategy: Fallback strategy implementation
        """
        strategies = self._registry.setdefault(operation_key, [])
        if strategy in strategies:
            return

        strategies.append(strategy)
        strategies.sort(key=lambda s: s.get_fallback_priority(), reverse=True)

        self.logger.info(
            f"Registered fallback strategy for operation '{operation_key}': "
            f"{strategy.__class__.__name__} with priority {strategy.get_fallback_priority()}"
        )

    def has_fallback(self, operation_key: str, request_params: Optional[Dict[str, Any]] = None) -> bool:
        """
        Check if a fallback exists for an operation.

        Args:
            operation_key: Unique identifier for the operation
            request_params: Parameters for the operation

        Returns:
            bool: True if a fallback is available, False otherwise
        """
        request_params = request_params or {}
        return any(
            strategy.can_handle(request_params)
            for strategy in self._registry.get(operation_key, [])
        )

    def execute_fallback(
        self,
        operation_key: str,
        request_params: Dict[str, Any],
        error: ErrorClassification
    ) -> Any:
        """
        Execute the appropriate fallback strategy for an operation.

        Args:
            operation_key: Unique identifier for the operation
            request_params: Parameters for the operation
            error: Classification of the failure that triggered the fallback

        Returns:
            Any: Fallback data

        Raises:
            NoFallbackAvailable: If no suitable fallback is available
        """
        for strategy in self._registry.get(operation_key, []):
            if not strategy.can_handle(request_params):
                continue

            try:
                result = strategy.execute(request_params, error)
            except Exception as e:
                self.logger.warning(
                    f"Fallback strategy {strategy.__class__.__name__} failed: {str(e)}. "
                    f"Trying next strategy if available."
                )
                continue

            self.logger.info(
                f"Fallback strategy {strategy.__class__.__name__} "
                f"served operation '{operation_key}' after {error.kind.value}"
            )
            return result

        raise NoFallbackAvailable(
            f"No suitable fallback strategy available for operation '{operation_key}' "
            f"with params {json.dumps(request_params, default=str)}"
        )
