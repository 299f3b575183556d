"""Migration definition sources."""

from .directory import DirectorySource, create_definition, normalize_name

__all__ = [
    "DirectorySource",
    "create_definition",
    "normalize_name",
]
