"""
Collaborator interfaces (abstractions).
Using Protocol for structural subtyping (duck typing with type hints).
These define the contracts that data access implementations must follow.
"""
from typing import Awaitable, Callable, List, Optional, Protocol, Union, runtime_checkable

from toggles.models.schemas import Flag


@runtime_checkable
class FlagStore(Protocol):
    """
    Interface for flag record access.
    Production: relational database implementation.
    Testing: In-memory implementation.

    Lookup failures (connectivity, malformed rows) are raised to the caller;
    only a missing flag is reported as data.
    """

    async def get_by_name(self, name: str) -> Optional[Flag]:
        """
        Fetch a flag by its unique name.

        Args:
            name: Flag name

        Returns:
            Flag if found, None otherwise
        """
        ...

    async def get_many_by_name(self, names: List[str]) -> List[Flag]:
        """
        Fetch several flags in a single lookup.

        Args:
            names: Flag names to fetch

        Returns:
            Flags found; missing names are omitted and each name appears at most once
        """
        ...

    async def list_flags(self) -> List[Flag]:
        """
        Fetch every flag in the store.

        Returns:
            All flag records (may be empty)
        """
        ...


# Called with a flag whose expiration has passed. True/False overrides the
# result, None lets rule evaluation proceed. May be sync or async.
ExpirationGate = Callable[[Flag], Union[Optional[bool], Awaitable[Optional[bool]]]]
