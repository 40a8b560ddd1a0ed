from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from analysis_model.domain.report import Report

if TYPE_CHECKING:
    from analysis_model.parsers.reader import ReaderFactory


class ParsingError(Exception):
    """The input is not in the format the parser expects."""

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(message)
        self.file_name = file_name

    def __str__(self) -> str:
        message = super().__str__()
        if self.file_name and self.file_name not in message:
            return f"{message} (in '{self.file_name}')"
        return message


class ParsingCanceledError(Exception):
    """The caller canceled a running parser."""


class IssueParser(ABC):
    """Converts the output of one static analysis tool into a Report.

    Implementations are independent strategies; shared extraction code lives
    in ``analysis_model.parsers.util``.
    """

    def __init__(self) -> None:
        self._canceled = threading.Event()

    @abstractmethod
    def parser_id(self) -> str:
        """Short identifier used as origin of the issues, e.g. ``"pmd"``."""

    @abstractmethod
    def parse(self, reader_factory: ReaderFactory) -> Report:
        """Parse the content; raise ParsingError if the format does not fit."""

    def accepts(self, reader_factory: ReaderFactory) -> bool:
        """Return True if the parser can handle the content (cheap check)."""
        return True

    def cancel(self) -> None:
        """Abort the running (or next) parse at its next cancellation check."""
        self._canceled.set()

    def reset(self) -> None:
        self._canceled.clear()

    def check_canceled(self) -> None:
        # A cancellation aborts one parse only, the parser stays usable
        if self._canceled.is_set():
            self.reset()
            raise ParsingCanceledError(f"Parsing with '{self.parser_id()}' has been canceled")
