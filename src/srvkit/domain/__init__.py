"""Domain – business entities, their repository ports and errors."""
from srvkit.domain.users import (
    InvalidUserError,
    User,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserRepository,
    generate_id,
    new_user,
)

__all__ = [
    "InvalidUserError",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserRepository",
    "generate_id",
    "new_user",
]
