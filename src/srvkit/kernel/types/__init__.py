"""Kernel – value types."""
from srvkit.kernel.types.email import Email

__all__ = ["Email"]
