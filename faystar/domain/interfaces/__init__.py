from faystar.domain.interfaces.repository_interface import RepositoryInterface, UserRepositoryInterface

__all__ = ["RepositoryInterface", "UserRepositoryInterface"]
