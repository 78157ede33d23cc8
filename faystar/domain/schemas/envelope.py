import secrets
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_request_id(prefix: str = "req") -> str:
    """Request id of the form ``<prefix>_<epoch millis>_<random>``."""
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


def utc_timestamp() -> str:
    """Current UTC time in ISO-8601 with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ServiceEnvelope(BaseModel):
    """
    Uniform response shape for every inbound call.

    Exactly one of ``data`` (success) or ``error`` (failure) is meaningful.
    Immutable once built.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    success: bool
    data: Any = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    message: Optional[str] = None
    details: Any = None
    request_id: str = Field(default_factory=new_request_id)
    timestamp: str = Field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys, dropping unset top-level fields."""
        payload = self.model_dump(by_alias=True)
        if self.success:
            payload.pop("error", None)
            payload.pop("errorType", None)
        else:
            payload.pop("data", None)
        return {k: v for k, v in payload.items() if v is not None or k == "data"}
