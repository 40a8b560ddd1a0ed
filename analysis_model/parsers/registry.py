from __future__ import annotations

from typing import Iterable

from analysis_model.parsers.base import IssueParser
from analysis_model.parsers.reader import ReaderFactory


class ParserRegistry:
    def __init__(self, parsers: Iterable[IssueParser] = ()):
        self._by_id: dict[str, IssueParser] = {}
        for parser in parsers:
            self.register(parser)

    def register(self, parser: IssueParser) -> None:
        self._by_id[parser.parser_id()] = parser

    def list(self) -> list[str]:
        return sorted(self._by_id.keys())

    def get(self, parser_id: str) -> IssueParser | None:
        return self._by_id.get(parser_id)

    def pick(self, parser_id: str) -> IssueParser:
        parser = self.get(parser_id)
        if parser is None:
            available = ", ".join(self.list())
            raise ValueError(f"Unknown parser '{parser_id}'. Available: {available}")
        return parser

    def find_accepting(self, reader_factory: ReaderFactory) -> list[IssueParser]:
        return [self._by_id[n] for n in self.list() if self._by_id[n].accepts(reader_factory)]
