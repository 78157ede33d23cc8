from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Collection, Dict, Generic, Optional, TypeVar

from faystar.core.exceptions import ValidationException

# Caller input type
T = TypeVar('T')


@dataclass(frozen=True)
class ProviderRequest:
    """A normalized outbound call: where to send it and what to send."""
    endpoint: str
    payload: Optional[Dict[str, Any]] = None
    method: str = "POST"
    accept: Optional[str] = None


class RequestNormalizer(Generic[T], ABC):
    """
    Abstract base interface for request normalizers.

    A normalizer converts caller input into the payload shape a provider
    expects: free text is trimmed and bounded, omitted options get defaults,
    enumerated options are checked and tuning parameters are clamped.
    Every rejection raises ValidationException before any network I/O.

    Type Parameters:
        T: The type of caller input
    """

    @abstractmethod
    def normalize(self, request: T) -> ProviderRequest:
        """
        Convert caller input into a provider payload.

        Args:
            request: Caller input

        Returns:
            ProviderRequest: Endpoint and payload for the provider call

        Raises:
            ValidationException: If the input cannot be normalized
        """
        pass

    # Shared helpers

    @staticmethod
    def require_text(value: Optional[str], field: str, max_length: int) -> str:
        """Trim free text, rejecting empty and over-long values."""
        if value is not None and not isinstance(value, str):
            raise ValidationException(f"{field} must be a string", field=field)
        text = (value or "").strip()
        if not text:
            raise ValidationException(f"{field} is required", field=field)
        if len(text) > max_length:
            raise ValidationException(
                f"{field} must be {max_length} characters or less",
                field=field,
                context={"maxLength": max_length, "length": len(text)},
            )
        return text

    @staticmethod
    def require_choice(value: Any, field: str, choices: Collection[Any], default: Any) -> Any:
        """Return value, or default when omitted; reject values outside choices."""
        if value is None:
            return default
        if value not in choices:
            raise ValidationException(
                f"Invalid {field}. Must be one of: {', '.join(str(c) for c in choices)}",
                field=field,
            )
        return value

    @staticmethod
    def require_range(value: Any, field: str, minimum: float, maximum: float, default: Any) -> Any:
        """Return value, or default when omitted; reject values outside [minimum, maximum]."""
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationException(f"{field} must be a number", field=field)
        if value < minimum or value > maximum:
            raise ValidationException(
                f"{field} must be between {minimum:g} and {maximum:g}",
                field=field,
            )
        return value


def normalize_unit_interval(value: Optional[float], default: float) -> float:
    """
    Normalize an ambiguous 0-1 / 0-100 tuning parameter.

    Values above 1 are read as percentages and divided by 100; the result is
    clamped to [0.0, 1.0]. None yields the default.
    """
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationException("Tuning parameters must be numbers")
    result = float(value)
    if result > 1:
        result = result / 100
    return max(0.0, min(1.0, result))

