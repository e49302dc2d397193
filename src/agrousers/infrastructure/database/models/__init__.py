from .identity import UserModel

__all__ = [
    "UserModel",
]
