from __future__ import annotations

import re

from analysis_model.domain.builder import IssueBuilder
from analysis_model.domain.models import Issue
from analysis_model.domain.report import Report
from analysis_model.parsers.base import IssueParser
from analysis_model.parsers.reader import ReaderFactory
from analysis_model.parsers.util import parse_lines

# [exec] COPY\zzz.CPY, line 39: Warning: Imperative statement required
ACU_COBOL_WARNING = re.compile(r"^\s*(\[.*\])?\s*?(.*), line ([0-9]*): Warning: (.*)$")


class AcuCobolParser(IssueParser):
    """Parser for the console output of the AcuCobol compiler."""

    def parser_id(self) -> str:
        return "acu-cobol"

    def parse(self, reader_factory: ReaderFactory) -> Report:
        return parse_lines(self, reader_factory, ACU_COBOL_WARNING, _create_issue)


def _create_issue(match: re.Match[str], builder: IssueBuilder) -> Issue | None:
    if not match.group(2).strip():
        return None
    return (
        builder.set_file_name(match.group(2))
        .set_line_start(match.group(3))
        .set_message(match.group(4))
        .build()
    )
