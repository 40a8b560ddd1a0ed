from __future__ import annotations

from dataclasses import dataclass, field

from analysis_model.core.config import settings
from analysis_model.domain.builder import IssueBuilder
from analysis_model.domain.models import DuplicationGroup, LineRange, Severity
from analysis_model.domain.report import Report
from analysis_model.parsers.base import IssueParser
from analysis_model.parsers.reader import ReaderFactory
from analysis_model.parsers.util import as_int, peek, read_xml

DUPLICATE_CODE = "Duplicate Code"


@dataclass
class _Block:
    file_name: str
    start: int
    end: int


@dataclass
class _SimianState:
    is_simian: bool = False
    line_count: int = 0
    blocks: list[_Block] = field(default_factory=list)


class SimianParser(IssueParser):
    """
    Parser for the XML report of the Simian duplicate code finder. Every
    block of a duplication becomes one issue; all issues of a duplication
    share one DuplicationGroup.
    """

    def __init__(self, high_threshold: int | None = None, normal_threshold: int | None = None):
        super().__init__()
        self.high_threshold = settings.SIMIAN_HIGH_THRESHOLD if high_threshold is None else high_threshold
        self.normal_threshold = settings.SIMIAN_NORMAL_THRESHOLD if normal_threshold is None else normal_threshold

    def parser_id(self) -> str:
        return "simian"

    def accepts(self, reader_factory: ReaderFactory) -> bool:
        return "<simian" in peek(reader_factory)

    def parse(self, reader_factory: ReaderFactory) -> Report:
        report = Report()
        state = _SimianState()
        for event in read_xml(self, reader_factory):
            if event.kind == "start":
                if event.tag == "simian":
                    state.is_simian = True
                elif event.tag == "set":
                    state.line_count = as_int(event.attributes.get("lineCount"))
                    state.blocks = []
                continue

            if event.tag == "block" and state.is_simian:
                state.blocks.append(
                    _Block(
                        file_name=event.attributes.get("sourceFile", ""),
                        start=as_int(event.attributes.get("startLineNumber")),
                        end=as_int(event.attributes.get("endLineNumber")),
                    )
                )
            elif event.tag == "set" and state.is_simian:
                self._add_duplication(report, state)
                state.blocks = []

        if not state.is_simian:
            report.log_info("Skipped '%s': not a Simian report", reader_factory.file_name)
        return report

    def get_severity(self, line_count: int) -> Severity:
        if line_count >= self.high_threshold:
            return Severity.HIGH
        if line_count >= self.normal_threshold:
            return Severity.NORMAL
        return Severity.LOW

    def _add_duplication(self, report: Report, state: _SimianState) -> None:
        group = DuplicationGroup()
        severity = self.get_severity(state.line_count)
        for block in state.blocks:
            builder = (
                IssueBuilder()
                .set_origin(self.parser_id())
                .set_severity(severity)
                .set_category(DUPLICATE_CODE)
                .set_type(DUPLICATE_CODE)
                .set_message(f"Found duplicated code ({state.line_count} lines).")
                .set_file_name(block.file_name)
                .set_line_start(block.start)
                .set_line_end(block.end)
                .set_additional_properties(group)
            )
            for other in state.blocks:
                if other is not block:
                    builder.add_line_range(LineRange(other.start, other.end))
            report.add(builder.build())
