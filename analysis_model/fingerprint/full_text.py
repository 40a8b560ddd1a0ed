"""Content based fingerprints for issues.

The fingerprint of an issue is the MD5 digest of the source lines around the
affected line. Whitespace at the start and end of every line is ignored (and
runs of whitespace inside a line are collapsed), so reformatting or moving the
surrounding code does not change the fingerprint while an edit of the code
near the issue does.
"""

from __future__ import annotations

import hashlib
import re

from analysis_model.core.config import settings

_WHITESPACE = re.compile(r"\s+")


class FileSystem:
    """Reads source files, the only I/O of the fingerprint engine.

    Raises ``FileNotFoundError`` for missing files, ``UnicodeDecodeError`` or
    ``LookupError`` if the charset does not fit, ``OSError`` or ``ValueError``
    for everything else (e.g. directories or paths with a null byte).
    """

    def read_lines(self, path: str, charset: str) -> list[str]:
        with open(path, encoding=charset) as f:
            lines = f.read().splitlines()
        if lines and lines[0].startswith("\ufeff"):
            lines[0] = lines[0][1:]
        return lines


class FullTextFingerprint:
    def __init__(
        self,
        file_system: FileSystem | None = None,
        context_lines: int | None = None,
        collapse_whitespace: bool | None = None,
    ):
        self.file_system = file_system or FileSystem()
        self.context_lines = settings.FINGERPRINT_CONTEXT_LINES if context_lines is None else context_lines
        self.collapse_whitespace = (
            settings.FINGERPRINT_COLLAPSE_WHITESPACE if collapse_whitespace is None else collapse_whitespace
        )
        self._cache: dict[tuple[str, str], list[str] | Exception] = {}

    @property
    def window_size(self) -> int:
        return 2 * self.context_lines + 1

    def compute(self, path: str, line: int, charset: str) -> str:
        """Fingerprint of *line* (1-based) in the file at *path*."""
        lines = self._read(path, charset)
        context = self.create_context(lines, line)
        return hashlib.md5(context.encode("utf-8"), usedforsecurity=False).hexdigest()

    def create_context(self, lines: list[str], line: int) -> str:
        """Normalized lines of the window centered on *line*.

        The window is clipped at the start and end of the file, so it spans
        fewer than ``window_size`` lines there.
        """
        if not lines:
            return ""

        index = min(max(line, 1), len(lines)) - 1
        start = max(0, index - self.context_lines)
        end = min(len(lines), index + self.context_lines + 1)
        return "\n".join(self._normalize(text) for text in lines[start:end])

    def clear_cache(self) -> None:
        self._cache.clear()

    def _normalize(self, text: str) -> str:
        text = text.strip()
        if self.collapse_whitespace:
            text = _WHITESPACE.sub(" ", text)
        return text

    def _read(self, path: str, charset: str) -> list[str]:
        key = (path, charset)
        cached = self._cache.get(key)
        if cached is None:
            try:
                cached = self.file_system.read_lines(path, charset)
            except (OSError, ValueError, LookupError) as e:
                cached = e
            self._cache[key] = cached
        if isinstance(cached, Exception):
            raise cached
        return cached
