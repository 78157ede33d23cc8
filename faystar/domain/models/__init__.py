from faystar.domain.models.user import User

__all__ = ["User"]
