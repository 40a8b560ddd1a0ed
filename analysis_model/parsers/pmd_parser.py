from __future__ import annotations

from dataclasses import dataclass, field

from analysis_model.domain.builder import IssueBuilder
from analysis_model.domain.models import Issue, Severity
from analysis_model.domain.report import Report
from analysis_model.parsers.base import IssueParser, ParsingError
from analysis_model.parsers.reader import ReaderFactory
from analysis_model.parsers.util import as_int, peek, read_xml

# PMD priorities 1-2 are high, 3-4 normal, 5 low
PRIORITY_MAPPED_TO_HIGH = 3
PRIORITY_MAPPED_TO_LOW = 4


@dataclass
class _PmdState:
    is_pmd: bool = False
    file_name: str | None = None
    violations: list[Issue] = field(default_factory=list)
    errors: list[Issue] = field(default_factory=list)


class PmdParser(IssueParser):
    """Parser for the XML report of PMD (``pmd -f xml``)."""

    def parser_id(self) -> str:
        return "pmd"

    def accepts(self, reader_factory: ReaderFactory) -> bool:
        return "<pmd" in peek(reader_factory)

    def parse(self, reader_factory: ReaderFactory) -> Report:
        state = _PmdState()
        for event in read_xml(self, reader_factory):
            if event.kind == "start":
                if event.tag == "pmd":
                    state.is_pmd = True
                elif event.tag == "file":
                    state.file_name = event.attributes.get("name")
                continue

            if event.tag == "violation" and state.file_name is not None:
                state.violations.append(self._violation(state.file_name, event.attributes, event.text))
            elif event.tag == "error":
                state.errors.append(self._error(event.attributes, event.text))
            elif event.tag == "file":
                state.file_name = None

        if not state.is_pmd:
            raise ParsingError("Input stream is not a PMD file.", reader_factory.file_name)

        report = Report()
        report.add_all(state.violations, state.errors)
        return report

    def _violation(self, file_name: str, attributes: dict[str, str], text: str) -> Issue:
        return (
            IssueBuilder()
            .set_origin(self.parser_id())
            .set_severity(_map_priority(as_int(attributes.get("priority"), PRIORITY_MAPPED_TO_HIGH)))
            .set_message(_create_message(text))
            .set_category(attributes.get("ruleset"))
            .set_type(attributes.get("rule"))
            .set_line_start(attributes.get("beginline"))
            .set_line_end(attributes.get("endline"))
            .set_column_start(attributes.get("begincolumn"))
            .set_column_end(attributes.get("endcolumn"))
            .set_package_name(attributes.get("package"))
            .set_file_name(file_name)
            .build()
        )

    def _error(self, attributes: dict[str, str], text: str) -> Issue:
        return (
            IssueBuilder()
            .set_origin(self.parser_id())
            .set_severity(Severity.ERROR)
            .set_message(attributes.get("msg"))
            .set_description(text)
            .set_file_name(attributes.get("filename"))
            .build()
        )


def _map_priority(priority: int) -> Severity:
    if priority < PRIORITY_MAPPED_TO_HIGH:
        return Severity.HIGH
    if priority > PRIORITY_MAPPED_TO_LOW:
        return Severity.LOW
    return Severity.NORMAL


def _create_message(text: str) -> str:
    if not text:
        return ""
    return text if text.endswith(".") else text + "."
