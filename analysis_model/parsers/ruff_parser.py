from __future__ import annotations

import re
from pathlib import Path

from analysis_model.domain.builder import IssueBuilder
from analysis_model.domain.models import Severity
from analysis_model.domain.report import Report
from analysis_model.parsers.base import IssueParser, ParsingError
from analysis_model.parsers.reader import ReaderFactory
from analysis_model.parsers.util import peek, read_json, resolve_path

RULE_PREFIX = re.compile(r"^[A-Z]+")


class RuffParser(IssueParser):
    def __init__(self, workspace: Path | None = None):
        super().__init__()
        self.workspace = workspace

    def parser_id(self) -> str:
        return "ruff"

    def accepts(self, reader_factory: ReaderFactory) -> bool:
        head = peek(reader_factory).lstrip()
        return head.startswith("[") and ('"code"' in head or head.startswith("[]"))

    def parse(self, reader_factory: ReaderFactory) -> Report:
        data = read_json(reader_factory, empty="[]")
        if not isinstance(data, list):
            raise ParsingError("Input stream is not a ruff JSON report.", reader_factory.file_name)

        report = Report()
        for it in data:
            self.check_canceled()
            if not isinstance(it, dict):
                report.log_error("Skipped malformed ruff result: %r", it)
                continue

            loc = it.get("location") or {}
            end = it.get("end_location") or {}
            if not isinstance(loc, dict) or not isinstance(end, dict):
                report.log_error("Skipped ruff result with malformed location: %r", it)
                continue

            code = it.get("code")
            prefix = RULE_PREFIX.match(code or "")

            # Ruff reports syntax errors without a rule code
            builder = (
                IssueBuilder()
                .set_origin(self.parser_id())
                .set_file_name(resolve_path(it.get("filename") or "", self.workspace))
                .set_line_start(loc.get("row"))
                .set_column_start(loc.get("column"))
                .set_line_end(end.get("row"))
                .set_column_end(end.get("column"))
                .set_type(code or "syntax-error")
                .set_category(prefix.group(0) if prefix else "")
                .set_severity(Severity.LOW if code else Severity.ERROR)
                .set_message(it.get("message") or "Ruff finding")
                .set_additional_properties(
                    {"fixable": it.get("fix") is not None or bool(it.get("fixable")), "url": it.get("url")}
                )
            )
            report.add(builder.build())
        return report
