import abc
from typing import Any, Dict, Generic, TypeVar

from faystar.infrastructure.error.handler import ErrorClassification

# Generic type for fallback data
T = TypeVar('T')


class FallbackStrategy(Generic[T], abc.ABC):
    """
    Abstract base class for fallback strategies.

    A strategy produces substitute data for an operation whose provider call
    failed. Strategies are registered per operation with the FallbackHandler
    and tried in priority order.
    """

    @abc.abstractmethod
    def execute(self, request_params: Dict[str, Any], error: ErrorClassification) -> T:
        """
        Execute the fallback strategy to produce substitute data.

        Args:
            request_params: Parameters from the original request
            error: Classification of the failure that triggered the fallback

        Returns:
            T: Fallback data of the appropriate type
        """
        pass

    @abc.abstractmethod
    def can_handle(self, request_params: Dict[str, Any]) -> bool:
        """
        Check if this strategy can handle the given request parameters.

        Args:
            request_params: Parameters from the original request

        Returns:
            bool: True if this strategy can handle the request, False otherwise
        """
        pass

    @abc.abstractmethod
    def get_fallback_priority(self) -> int:
        """
        Get the priority of this fallback strategy.
        Higher values indicate higher priority.

        Returns:
            int: Priority value
        """
        pass


class StaticFallbackStrategy(FallbackStrategy[T], abc.ABC):
    """
    Abstract fallback strategy that returns static predefined data.
    """

    def can_handle(self, request_params: Dict[str, Any]) -> bool:
        return True

    def get_fallback_priority(self) -> int:
        """
        Static fallbacks have a middling priority.

        Returns:
            int: Priority value (default: 50)
        """
        return 50
