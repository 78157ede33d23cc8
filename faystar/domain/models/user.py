from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4


@dataclass
class User:
    """
    Domain model for an account holder.

    The password hash never leaves the domain; ``to_public_dict`` is the
    representation returned to callers.
    """
    email: str
    password_hash: str
    first_name: str
    last_name: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_active: bool = True

    def to_public_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "createdAt": self.created_at.isoformat().replace("+00:00", "Z"),
            "isActive": self.is_active,
        }
