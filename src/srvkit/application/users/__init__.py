"""Application – user use cases."""
from srvkit.application.users.service import UserService

__all__ = ["UserService"]
