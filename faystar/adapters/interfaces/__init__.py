from faystar.adapters.interfaces.fallback import FallbackStrategy, StaticFallbackStrategy
from faystar.adapters.interfaces.normalizer import (
    ProviderRequest,
    RequestNormalizer,
    normalize_unit_interval,
)

__all__ = [
    "FallbackStrategy",
    "StaticFallbackStrategy",
    "ProviderRequest",
    "RequestNormalizer",
    "normalize_unit_interval",
]
