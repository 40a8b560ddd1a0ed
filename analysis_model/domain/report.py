from __future__ import annotations

import logging
from collections import Counter
from typing import Callable, Iterable, Iterator

from analysis_model.domain.models import Issue, Severity

logger = logging.getLogger(__name__)


def _format(fmt: str, args: tuple) -> str:
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError):
        return " ".join([fmt, *map(str, args)])


class Report:
    """Ordered, deduplicating collection of the issues of one parser run.

    Besides the issues a report carries two channels of diagnostic messages
    (info and error) and counters per severity, origin and module that are
    kept up to date on every ``add``.
    """

    def __init__(self, issues: Iterable[Issue] = ()):
        self._issues: list[Issue] = []
        self._keys: set[tuple] = set()
        self._ids: set = set()
        self._duplicates = 0
        self._info: list[str] = []
        self._errors: list[str] = []
        self._by_severity: Counter[Severity] = Counter()
        self._by_origin: Counter[str] = Counter()
        self._by_module: Counter[str] = Counter()
        for issue in issues:
            self.add(issue)

    # ── Issues ────────────────────────────────────────────────────

    def add(self, issue: Issue) -> bool:
        """Append *issue* unless an issue with the same content exists.

        Returns False for a duplicate, which is only counted.
        """
        key = issue.dedup_key
        if key in self._keys:
            self._duplicates += 1
            return False

        self._keys.add(key)
        self._ids.add(issue.id)
        self._issues.append(issue)
        self._by_severity[issue.severity] += 1
        self._by_origin[issue.origin] += 1
        self._by_module[issue.module_name] += 1
        return True

    def add_all(self, *sources: Iterable[Issue]) -> Report:
        for source in sources:
            for issue in source:
                self.add(issue)
            if isinstance(source, Report):
                self._info.extend(source.info_messages)
                self._errors.extend(source.error_messages)
        return self

    def set_module_name(self, issue: Issue, module_name: str) -> bool:
        """Assign the module of an issue of this report if it has none yet."""
        previous = issue.module_name
        if not issue.set_module_name(module_name):
            return False
        if issue.id in self._ids:
            self._by_module[previous] -= 1
            if self._by_module[previous] <= 0:
                del self._by_module[previous]
            self._by_module[issue.module_name] += 1
        return True

    def filter(self, predicate: Callable[[Issue], bool]) -> Report:
        """New report with the matching issues (same instances, same order)."""
        filtered = Report()
        for issue in self._issues:
            if predicate(issue):
                filtered.add(issue)
        return filtered

    def by_severity(self, minimum: Severity) -> Report:
        return self.filter(lambda issue: issue.severity >= minimum)

    def get(self, index: int) -> Issue:
        return self._issues[index]

    def __getitem__(self, index: int) -> Issue:
        return self._issues[index]

    def find_by_id(self, issue_id) -> Issue | None:
        for issue in self._issues:
            if issue.id == issue_id:
                return issue
        return None

    def contains(self, issue: Issue) -> bool:
        return issue.dedup_key in self._keys

    def duplicates_of(self, issue: Issue) -> list[Issue]:
        """Other issues sharing the duplication group of *issue*."""
        group = issue.additional_properties
        if group is None:
            return []
        return [i for i in self._issues if i.additional_properties is group and i is not issue]

    def __iter__(self) -> Iterator[Issue]:
        return iter(list(self._issues))

    def __len__(self) -> int:
        return len(self._issues)

    def size(self) -> int:
        return len(self._issues)

    def is_empty(self) -> bool:
        return not self._issues

    @property
    def duplicates_size(self) -> int:
        return self._duplicates

    # ── Statistics ────────────────────────────────────────────────

    def count_by_severity(self, severity: Severity) -> int:
        return self._by_severity[severity]

    get_size_of = count_by_severity

    def get_counts_by_severity(self) -> dict[Severity, int]:
        return {severity: self._by_severity[severity] for severity in Severity.all()}

    def get_size_by_origin(self) -> dict[str, int]:
        return dict(self._by_origin)

    def get_size_by_module(self) -> dict[str, int]:
        return dict(self._by_module)

    @property
    def origins(self) -> set[str]:
        return {origin for origin, count in self._by_origin.items() if count > 0}

    @property
    def modules(self) -> set[str]:
        return {module for module, count in self._by_module.items() if count > 0}

    @property
    def files(self) -> list[str]:
        return sorted({i.file_name for i in self._issues})

    @property
    def packages(self) -> list[str]:
        return sorted({i.package_name for i in self._issues})

    @property
    def categories(self) -> list[str]:
        return sorted({i.category for i in self._issues})

    @property
    def types(self) -> list[str]:
        return sorted({i.type for i in self._issues})

    # ── Diagnostics ───────────────────────────────────────────────

    def log_info(self, fmt: str, *args) -> None:
        message = _format(fmt, args)
        self._info.append(message)
        logger.debug(message)

    def log_error(self, fmt: str, *args) -> None:
        message = _format(fmt, args)
        self._errors.append(message)
        logger.warning(message)

    @property
    def info_messages(self) -> tuple[str, ...]:
        return tuple(self._info)

    @property
    def error_messages(self) -> tuple[str, ...]:
        return tuple(self._errors)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return f"Report({len(self._issues)} issues, {self._duplicates} duplicates)"
