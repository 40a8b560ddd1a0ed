"""Diagnostics log with an upper bound on the number of stored lines.

Parsers and the post-processing passes may produce an error for every single
issue of a large report. A :class:`FilteredLog` writes the first ``max_lines``
messages to the owning :class:`Report` and only counts the rest;
``log_summary()`` finally adds one line that tells how many were skipped.
"""

from __future__ import annotations

import traceback

from analysis_model.core.config import settings
from analysis_model.domain.report import Report

MAX_STACK_FRAMES = 3


class FilteredLog:
    def __init__(self, report: Report, title: str, max_lines: int | None = None):
        self._report = report
        self._title = title
        self._max_lines = settings.FILTERED_LOG_MAX_LINES if max_lines is None else max_lines
        self._lines = 0
        self._suppressed = 0
        self._title_written = False
        self._summary_written = False

    def log_error(self, fmt: str, *args) -> None:
        if self._accept():
            self._write_title()
            self._report.log_error(fmt, *args)

    def log_info(self, fmt: str, *args) -> None:
        if self._accept():
            self._report.log_info(fmt, *args)

    def log_exception(self, error: BaseException, fmt: str, *args) -> None:
        if not self._accept():
            return

        self._write_title()
        self._report.log_error(fmt, *args)
        text = str(error)
        self._report.log_error("%s: %s" % (type(error).__name__, text) if text else type(error).__name__)
        frames = traceback.extract_tb(error.__traceback__)[-MAX_STACK_FRAMES:]
        for frame in reversed(frames):
            self._report.log_error('\tat %s (%s:%d)' % (frame.name, frame.filename, frame.lineno))

    def log_summary(self) -> None:
        if self._suppressed > 0 and not self._summary_written:
            self._report.log_error("  ... skipped logging of %d additional errors ...", self._suppressed)
            self._summary_written = True

    def size(self) -> int:
        """Number of log attempts, including the suppressed ones."""
        return self._lines + self._suppressed

    def _accept(self) -> bool:
        if self._lines < self._max_lines:
            self._lines += 1
            return True
        self._suppressed += 1
        return False

    def _write_title(self) -> None:
        if not self._title_written:
            self._title_written = True
            if self._title:
                self._report.log_error(self._title)
