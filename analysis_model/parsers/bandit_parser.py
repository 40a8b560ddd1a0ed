from __future__ import annotations

from pathlib import Path

from analysis_model.domain.builder import IssueBuilder
from analysis_model.domain.models import Severity
from analysis_model.domain.report import Report
from analysis_model.parsers.base import IssueParser, ParsingError
from analysis_model.parsers.reader import ReaderFactory
from analysis_model.parsers.util import as_int, peek, read_json, resolve_path

SEVERITIES = {"HIGH": Severity.HIGH, "MEDIUM": Severity.NORMAL, "LOW": Severity.LOW}


class BanditParser(IssueParser):
    """Parser for the JSON report of bandit (``bandit -f json``).

    Relative file names are resolved against *workspace* when given.
    """

    def __init__(self, workspace: Path | None = None):
        super().__init__()
        self.workspace = workspace

    def parser_id(self) -> str:
        return "bandit"

    def accepts(self, reader_factory: ReaderFactory) -> bool:
        head = peek(reader_factory)
        return head.lstrip().startswith("{") and '"results"' in head

    def parse(self, reader_factory: ReaderFactory) -> Report:
        data = read_json(reader_factory)
        if not isinstance(data, dict):
            raise ParsingError("Input stream is not a bandit JSON report.", reader_factory.file_name)

        report = Report()
        for r in data.get("results") or []:
            self.check_canceled()
            if not isinstance(r, dict):
                report.log_error("Skipped malformed bandit result: %r", r)
                continue

            line = as_int(r.get("line_number"))
            line_range = [as_int(n) for n in r.get("line_range") or [] if as_int(n) > 0]
            sev = (r.get("issue_severity") or "LOW").upper()
            col = r.get("col_offset")
            end_col = r.get("end_col_offset")

            builder = (
                IssueBuilder()
                .set_origin(self.parser_id())
                .set_file_name(resolve_path(str(r.get("filename") or ""), self.workspace))
                .set_line_start(line)
                .set_line_end(max(line_range) if line_range else line)
                .set_column_start(as_int(col) + 1 if col is not None else 0)
                .set_column_end(as_int(end_col) + 1 if end_col is not None else 0)
                .set_severity(SEVERITIES.get(sev, Severity.LOW))
                .set_type(r.get("test_id"))
                .set_category(r.get("test_name"))
                .set_message(r.get("issue_text") or "Bandit finding")
                .set_description(r.get("code"))
                .set_additional_properties(
                    {
                        "confidence": (r.get("issue_confidence") or "LOW").upper(),
                        "more_info": r.get("more_info"),
                    }
                )
            )
            report.add(builder.build())

        for e in data.get("errors") or []:
            if isinstance(e, dict):
                report.log_error("bandit failed on '%s': %s", e.get("filename"), e.get("reason"))

        return report
