"""Small helpers shared by the parsers."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Callable, Iterator

from analysis_model.core.security import XmlEvent, XmlSyntaxError, iter_xml_events
from analysis_model.domain.builder import IssueBuilder
from analysis_model.domain.models import Issue
from analysis_model.domain.report import Report
from analysis_model.parsers.base import IssueParser, ParsingError
from analysis_model.parsers.reader import ReaderFactory


_WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:/")


def as_int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def to_posix(file_name: str) -> str:
    return (file_name or "").strip().replace("\\", "/")


def resolve_path(filename: str, workspace: Path | None = None) -> str:
    """
    Convert a tool-reported filename to an absolute posix path.

    Handles three cases:
    1. Absolute path (POSIX or Windows drive)  → cleaned as-is
    2. Relative path and a workspace           → joined with the workspace
    3. Relative path without workspace         → strip leading ./
    """
    filename = to_posix(filename)
    if not filename:
        return ""
    if filename.startswith("/") or _WINDOWS_DRIVE.match(filename):
        return filename
    if workspace is None:
        return filename.removeprefix("./")
    joined = os.path.normpath(os.path.join(str(workspace), filename))
    return joined.replace("\\", "/")


def parse_lines(
    parser: IssueParser,
    reader_factory: ReaderFactory,
    pattern: re.Pattern[str],
    create_issue: Callable[[re.Match[str], IssueBuilder], Issue | None],
) -> Report:
    """Run *pattern* over every line, *create_issue* converts the matches.

    ``create_issue`` may return None to skip a match. The origin of the
    issues is set to the id of *parser*.
    """
    report = Report()
    try:
        for line in reader_factory.read_lines():
            parser.check_canceled()
            match = pattern.search(line)
            if not match:
                continue
            builder = IssueBuilder().set_origin(parser.parser_id())
            issue = create_issue(match, builder)
            if issue is not None:
                report.add(issue)
    except UnicodeDecodeError as e:
        raise ParsingError(f"Can't decode content with charset '{reader_factory.charset}': {e}",
                           reader_factory.file_name) from e
    return report


def read_xml(parser: IssueParser, reader_factory: ReaderFactory) -> Iterator[XmlEvent]:
    """XML events of the content; malformed input raises ParsingError."""
    try:
        with reader_factory.create() as reader:
            for event in iter_xml_events(reader):
                parser.check_canceled()
                yield event
    except XmlSyntaxError as e:
        raise ParsingError(f"Invalid XML: {e}", reader_factory.file_name) from e
    except UnicodeDecodeError as e:
        raise ParsingError(f"Can't decode content with charset '{reader_factory.charset}': {e}",
                           reader_factory.file_name) from e


def read_json(reader_factory: ReaderFactory, empty: str = "{}") -> Any:
    try:
        return json.loads(reader_factory.read_string().strip() or empty)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParsingError(f"Invalid JSON: {e}", reader_factory.file_name) from e


def peek(reader_factory: ReaderFactory, size: int = 4096) -> str:
    """First characters of the content, empty if it can't be read."""
    try:
        with reader_factory.create() as reader:
            return reader.read(size)
    except (ParsingError, UnicodeDecodeError):
        return ""
