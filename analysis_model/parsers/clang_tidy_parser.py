from __future__ import annotations

import re

from analysis_model.domain.builder import IssueBuilder
from analysis_model.domain.models import Issue, Severity
from analysis_model.domain.report import Report
from analysis_model.parsers.base import IssueParser
from analysis_model.parsers.reader import ReaderFactory
from analysis_model.parsers.util import parse_lines

# src/main.cpp:10:20: warning: implicit conversion changes signedness [clang-diagnostic-sign-conversion]
CLANG_TIDY_WARNING = re.compile(
    r"^\s*((?:[A-Za-z]:)?[^:]+):(\d+):(\d+):\s*(warning|error):\s*(.*?)\s*\[([^\s\]]+)\]\s*$"
)


class ClangTidyParser(IssueParser):
    """Parser for the console output of clang-tidy."""

    def parser_id(self) -> str:
        return "clang-tidy"

    def parse(self, reader_factory: ReaderFactory) -> Report:
        return parse_lines(self, reader_factory, CLANG_TIDY_WARNING, _create_issue)


def _create_issue(match: re.Match[str], builder: IssueBuilder) -> Issue:
    level = match.group(4)
    return (
        builder.set_file_name(match.group(1))
        .set_line_start(match.group(2))
        .set_column_start(match.group(3))
        .set_type(level.capitalize())
        .set_severity(Severity.HIGH if level == "error" else Severity.NORMAL)
        .set_message(match.group(5))
        .set_category(match.group(6))
        .build()
    )
