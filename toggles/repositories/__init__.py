"""Repository implementations package."""
from .memory import InMemoryFlagStore, load_flags_file

__all__ = [
    "InMemoryFlagStore",
    "load_flags_file",
]
