from users.entities.auth import LoginIn, TokenOut
from users.entities.user import UserCreate, UserDetailOut, UserOut

__all__ = ["LoginIn", "TokenOut", "UserCreate", "UserDetailOut", "UserOut"]
