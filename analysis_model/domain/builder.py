from __future__ import annotations

from typing import Any

from analysis_model.domain.models import UNDEFINED, Issue, LineRange, LineRangeList, Severity


def _to_int(value: int | str | None) -> int:
    if value is None:
        return 0
    try:
        number = int(str(value).strip())
    except ValueError:
        return 0
    return max(number, 0)


def _normalize_file_name(file_name: str | None) -> str:
    if not file_name or not file_name.strip():
        return UNDEFINED
    return file_name.strip().replace("\\", "/")


class IssueBuilder:
    """Mutable accumulator for :class:`Issue` instances.

    All setters return the builder so calls can be chained. ``build()`` takes
    a snapshot of the current values, the builder can be reused afterwards.
    """

    def __init__(self) -> None:
        self.file_name = UNDEFINED
        self.line_start = 0
        self.line_end = 0
        self.column_start = 0
        self.column_end = 0
        self.line_ranges = LineRangeList()
        self.severity = Severity.NORMAL
        self.category = ""
        self.type = ""
        self.package_name = UNDEFINED
        self.module_name = UNDEFINED
        self.origin = ""
        self.message = ""
        self.description = ""
        self.fingerprint = UNDEFINED
        self.additional_properties: Any = None

    def set_file_name(self, file_name: str | None) -> IssueBuilder:
        self.file_name = _normalize_file_name(file_name)
        return self

    def set_line_start(self, line: int | str | None) -> IssueBuilder:
        self.line_start = _to_int(line)
        return self

    def set_line_end(self, line: int | str | None) -> IssueBuilder:
        self.line_end = _to_int(line)
        return self

    def set_column_start(self, column: int | str | None) -> IssueBuilder:
        self.column_start = _to_int(column)
        return self

    def set_column_end(self, column: int | str | None) -> IssueBuilder:
        self.column_end = _to_int(column)
        return self

    def add_line_range(self, line_range: LineRange) -> IssueBuilder:
        self.line_ranges.add(line_range)
        return self

    def set_line_ranges(self, line_ranges: LineRangeList | list[LineRange]) -> IssueBuilder:
        self.line_ranges = LineRangeList(line_ranges)
        return self

    def set_severity(self, severity: Severity | None) -> IssueBuilder:
        self.severity = severity or Severity.NORMAL
        return self

    def guess_severity(self, text: str | None) -> IssueBuilder:
        self.severity = Severity.guess(text)
        return self

    def set_category(self, category: str | None) -> IssueBuilder:
        self.category = (category or "").strip()
        return self

    def set_type(self, type_: str | None) -> IssueBuilder:
        self.type = (type_ or "").strip()
        return self

    def set_package_name(self, package_name: str | None) -> IssueBuilder:
        self.package_name = (package_name or "").strip() or UNDEFINED
        return self

    def set_module_name(self, module_name: str | None) -> IssueBuilder:
        self.module_name = (module_name or "").strip() or UNDEFINED
        return self

    def set_origin(self, origin: str | None) -> IssueBuilder:
        self.origin = (origin or "").strip()
        return self

    def set_message(self, message: str | None) -> IssueBuilder:
        self.message = (message or "").strip()
        return self

    def set_description(self, description: str | None) -> IssueBuilder:
        self.description = (description or "").strip()
        return self

    def set_fingerprint(self, fingerprint: str | None) -> IssueBuilder:
        self.fingerprint = fingerprint or UNDEFINED
        return self

    def set_additional_properties(self, properties: Any) -> IssueBuilder:
        self.additional_properties = properties
        return self

    def copy(self, issue: Issue) -> IssueBuilder:
        """Prefill the builder with the values of an existing issue."""
        self.file_name = issue.file_name
        self.line_start = issue.line_start
        self.line_end = issue.line_end
        self.column_start = issue.column_start
        self.column_end = issue.column_end
        self.line_ranges = LineRangeList(issue.line_ranges)
        self.severity = issue.severity
        self.category = issue.category
        self.type = issue.type
        self.package_name = issue.package_name
        self.module_name = issue.module_name
        self.origin = issue.origin
        self.message = issue.message
        self.description = issue.description
        self.fingerprint = issue.fingerprint
        self.additional_properties = issue.additional_properties
        return self

    def build(self) -> Issue:
        # An end line of 0 means the issue covers its start line only
        line_end = self.line_end or self.line_start
        line_start, line_end = sorted((self.line_start, line_end))
        column_start, column_end = self.column_start, self.column_end
        if column_end and column_start > column_end and line_start == line_end:
            column_start, column_end = column_end, column_start

        return Issue(
            file_name=self.file_name,
            line_start=line_start,
            line_end=line_end,
            column_start=column_start,
            column_end=column_end,
            line_ranges=tuple(self.line_ranges),
            severity=self.severity,
            category=self.category,
            type=self.type,
            package_name=self.package_name,
            module_name=self.module_name,
            origin=self.origin,
            message=self.message,
            description=self.description,
            fingerprint=self.fingerprint,
            additional_properties=self.additional_properties,
        )
