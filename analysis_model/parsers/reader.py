"""Access to the content a parser reads, independent of where it lives."""

from __future__ import annotations

import codecs
import io
import re
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterator, TextIO

from analysis_model.core.config import settings
from analysis_model.parsers.base import ParsingError

_XML_ENCODING = re.compile(rb"""<\?xml[^>]*?encoding\s*=\s*["']([A-Za-z0-9._:-]+)["']""")


def detect_xml_charset(head: bytes) -> str | None:
    """Charset named in the XML declaration at the start of *head*, if valid."""
    match = _XML_ENCODING.search(head[:1024])
    if not match:
        return None
    name = match.group(1).decode("ascii")
    try:
        codecs.lookup(name)
    except LookupError:
        return None
    return name


class ReaderFactory(ABC):
    def __init__(self, charset: str | None = None):
        self._charset = charset

    @property
    @abstractmethod
    def file_name(self) -> str:
        """Name of the source, with forward slashes."""

    @property
    def charset(self) -> str:
        return self._charset or settings.DEFAULT_CHARSET

    @abstractmethod
    def create(self) -> ContextManager[TextIO]:
        """Open a text stream over the content, a leading BOM is skipped."""

    def read_string(self) -> str:
        with self.create() as reader:
            return reader.read()

    def read_lines(self) -> Iterator[str]:
        with self.create() as reader:
            for line in reader:
                yield line.rstrip("\r\n")


class FileReaderFactory(ReaderFactory):
    """
    Reads a file. Without an explicit charset the encoding of an XML
    declaration is used, otherwise the configured default charset.
    """

    def __init__(self, path: str | Path, charset: str | None = None):
        super().__init__(charset)
        self.path = Path(path)
        self._detected = charset is not None

    @property
    def file_name(self) -> str:
        return str(self.path.absolute()).replace("\\", "/")

    @property
    def charset(self) -> str:
        if not self._detected:
            self._charset = self._detect()
            self._detected = True
        return super().charset

    @contextmanager
    def create(self) -> Iterator[TextIO]:
        try:
            f = open(self.path, encoding=self.charset, errors="strict", newline=None)
        except FileNotFoundError as e:
            raise ParsingError(f"Can't find file '{self.file_name}'", self.file_name) from e
        except (OSError, ValueError, LookupError) as e:
            raise ParsingError(f"Can't read file '{self.file_name}': {e}", self.file_name) from e

        with f:
            try:
                _skip_bom(f)
            except UnicodeDecodeError as e:
                raise ParsingError(f"Can't read file '{self.file_name}': {e}", self.file_name) from e
            yield f

    def _detect(self) -> str | None:
        try:
            with open(self.path, "rb") as f:
                return detect_xml_charset(f.read(1024))
        except (OSError, ValueError):
            # Reported by create() when the content is read
            return None


class StringReaderFactory(ReaderFactory):
    """In-memory content, e.g. the console log of a build step."""

    def __init__(self, content: str, file_name: str = "-"):
        super().__init__("utf-8")
        self.content = content
        self._file_name = file_name.replace("\\", "/")

    @property
    def file_name(self) -> str:
        return self._file_name

    @contextmanager
    def create(self) -> Iterator[TextIO]:
        stream = io.StringIO(self.content)
        _skip_bom(stream)
        yield stream


def _skip_bom(stream: TextIO) -> None:
    position = stream.tell()
    if stream.read(1) != "\ufeff":
        stream.seek(position)
