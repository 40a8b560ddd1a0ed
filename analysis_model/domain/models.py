from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator

UNDEFINED = "-"


class Severity(str, Enum):
    ERROR = "ERROR"
    HIGH = "HIGH"
    NORMAL = "NORMAL"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def is_greater_or_equal(self, other: Severity) -> bool:
        return self >= other

    @classmethod
    def all(cls) -> list[Severity]:
        """Members from highest to lowest."""
        return sorted(cls, reverse=True)

    @classmethod
    def guess(cls, text: str | None, default: Severity | None = None) -> Severity:
        """Map the severity vocabulary of the various tools onto our levels."""
        fallback = default or cls.NORMAL
        if not text:
            return fallback
        key = text.strip().upper()
        if key in cls.__members__:
            return cls[key]
        return _ALIASES.get(key, fallback)


_RANKS = {Severity.LOW: 1, Severity.NORMAL: 2, Severity.HIGH: 3, Severity.ERROR: 4}

_ALIASES = {
    "FATAL": Severity.ERROR,
    "CRITICAL": Severity.ERROR,
    "BLOCKER": Severity.ERROR,
    "WARNING_HIGH": Severity.HIGH,
    "MAJOR": Severity.HIGH,
    "WARNING": Severity.NORMAL,
    "WARN": Severity.NORMAL,
    "MEDIUM": Severity.NORMAL,
    "WARNING_NORMAL": Severity.NORMAL,
    "MINOR": Severity.LOW,
    "INFO": Severity.LOW,
    "NOTE": Severity.LOW,
    "WARNING_LOW": Severity.LOW,
}


@dataclass(frozen=True)
class LineRange:
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end


class LineRangeList:
    """Ordered set of line ranges (insertion order, no duplicates)."""

    def __init__(self, ranges: Iterable[LineRange] = ()):
        self._ranges: dict[LineRange, None] = dict.fromkeys(ranges)

    def add(self, line_range: LineRange) -> None:
        self._ranges.setdefault(line_range)

    def __iter__(self) -> Iterator[LineRange]:
        return iter(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __contains__(self, line_range: object) -> bool:
        return line_range in self._ranges

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineRangeList):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"LineRangeList({list(self._ranges)!r})"


class DuplicationGroup:
    """Shared by all issues of one duplication, holds the duplicated code.

    The group does not know its issues; use ``Report.duplicates_of`` to find
    the other members of a duplication.
    """

    def __init__(self, code_fragment: str = ""):
        self.code_fragment = code_fragment

    def __repr__(self) -> str:
        return f"DuplicationGroup({len(self.code_fragment)} chars)"


@dataclass(frozen=True, eq=False)
class Issue:
    file_name: str = UNDEFINED
    line_start: int = 0
    line_end: int = 0
    column_start: int = 0
    column_end: int = 0
    line_ranges: tuple[LineRange, ...] = ()
    severity: Severity = Severity.NORMAL
    category: str = ""
    type: str = ""
    package_name: str = UNDEFINED
    module_name: str = UNDEFINED
    origin: str = ""
    message: str = ""
    description: str = ""
    fingerprint: str = UNDEFINED
    additional_properties: Any = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def base_name(self) -> str:
        return self.file_name.rsplit("/", 1)[-1]

    @property
    def absolute_path(self) -> str:
        return self.file_name

    @property
    def dedup_key(self) -> tuple:
        return (
            self.file_name,
            self.line_start,
            self.line_end,
            self.category,
            self.type,
            self.message,
            self.package_name,
        )

    def has_file_name(self) -> bool:
        return self.file_name != UNDEFINED

    def has_fingerprint(self) -> bool:
        return self.fingerprint != UNDEFINED

    def has_module_name(self) -> bool:
        return self.module_name != UNDEFINED

    def set_fingerprint(self, fingerprint: str) -> None:
        """Assign the fingerprint; it can be set only once."""
        if not fingerprint:
            raise ValueError("Fingerprint must not be empty")
        if self.has_fingerprint() and self.fingerprint != fingerprint:
            raise ValueError(f"Fingerprint of issue {self.id} is already set")
        object.__setattr__(self, "fingerprint", fingerprint)

    def set_module_name(self, module_name: str) -> bool:
        """Assign the module name unless one is already set."""
        if self.has_module_name() or not module_name:
            return False
        object.__setattr__(self, "module_name", module_name)
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Issue):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "file_name": self.file_name,
            "base_name": self.base_name,
            "line_start": self.line_start,
            "line_end": self.line_end,
            "column_start": self.column_start,
            "column_end": self.column_end,
            "line_ranges": [[r.start, r.end] for r in self.line_ranges],
            "severity": self.severity.value,
            "category": self.category,
            "type": self.type,
            "package_name": self.package_name,
            "module_name": self.module_name,
            "origin": self.origin,
            "message": self.message,
            "description": self.description,
            "fingerprint": self.fingerprint,
        }
