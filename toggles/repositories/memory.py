"""
In-memory Flag Store implementation.
Used for prototyping, seeding and testing.
Production would replace this with a relational store implementation.
"""
import json
import logging
from itertools import count
from pathlib import Path
from threading import Lock
from typing import Dict, Iterable, List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from toggles.core.exceptions import SeedFileError, ValidationError
from toggles.models.schemas import Flag, utcnow

logger = logging.getLogger(__name__)

_flag_list_adapter = TypeAdapter(List[Flag])


class InMemoryFlagStore:
    """
    In-memory implementation of FlagStore.
    Simulates a relational flag table: ids are assigned on insert and
    `list_flags` returns records in id order.
    """

    def __init__(self, flags: Optional[Iterable[Flag]] = None) -> None:
        self._flags: Dict[str, Flag] = {}
        self._ids = count(1)
        self._lock = Lock()
        for flag in flags or ():
            self.add(flag)

    def add(self, flag: Flag) -> Flag:
        """
        Insert a new flag, assigning its id and timestamps.

        Raises:
            ValidationError: If a flag with the same name already exists
        """
        with self._lock:
            if flag.name in self._flags:
                raise ValidationError(
                    f"Flag already exists: {flag.name}",
                    details={"name": flag.name},
                )
            now = utcnow()
            stored = flag.model_copy(
                update={"id": next(self._ids), "created": now, "modified": now}
            )
            self._flags[stored.name] = stored
        return stored

    def replace(self, flag: Flag) -> Optional[Flag]:
        """Overwrite an existing flag's rules, returns None if it does not exist."""
        with self._lock:
            current = self._flags.get(flag.name)
            if current is None:
                return None
            stored = flag.model_copy(
                update={"id": current.id, "created": current.created, "modified": utcnow()}
            )
            self._flags[stored.name] = stored
        return stored

    def remove(self, name: str) -> bool:
        """Delete a flag by name, returns True if it existed."""
        with self._lock:
            return self._flags.pop(name, None) is not None

    async def get_by_name(self, name: str) -> Optional[Flag]:
        """Fetch a flag by its unique name."""
        return self._flags.get(name)

    async def get_many_by_name(self, names: List[str]) -> List[Flag]:
        """Fetch several flags; missing names are omitted."""
        return [self._flags[name] for name in dict.fromkeys(names) if name in self._flags]

    async def list_flags(self) -> List[Flag]:
        """Fetch every flag, ordered by id."""
        return sorted(self._flags.values(), key=lambda f: f.id or 0)

    def __len__(self) -> int:
        return len(self._flags)


def load_flags_file(path: str) -> List[Flag]:
    """
    Read flag records from a JSON file containing a list of flag objects.

    Raises:
        SeedFileError: If the file is unreadable or a record is invalid
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        flags = _flag_list_adapter.validate_python(raw)
    except (OSError, json.JSONDecodeError) as e:
        raise SeedFileError(path, str(e)) from e
    except PydanticValidationError as e:
        raise SeedFileError(
            path,
            f"{e.error_count()} invalid flag record field(s)",
            errors=e.errors(include_url=False, include_context=False),
        ) from e

    logger.info(f"Loaded {len(flags)} flags from {path}")
    return flags
