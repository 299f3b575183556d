"""Command implementations for schemaledger CLI."""

from .create import handle_create
from .status import handle_status
from .up import handle_up

__all__ = [
    "handle_create",
    "handle_status",
    "handle_up",
]
