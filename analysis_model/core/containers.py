from __future__ import annotations

from pathlib import Path

from analysis_model.parsers.acu_cobol_parser import AcuCobolParser
from analysis_model.parsers.bandit_parser import BanditParser
from analysis_model.parsers.clang_tidy_parser import ClangTidyParser
from analysis_model.parsers.pmd_parser import PmdParser
from analysis_model.parsers.registry import ParserRegistry
from analysis_model.parsers.ruff_parser import RuffParser
from analysis_model.parsers.simian_parser import SimianParser


def build_parser_registry(workspace: Path | None = None) -> ParserRegistry:
    """Register all available parsers.

    To add a new parser:
    1. Implement ``IssueParser`` in ``analysis_model/parsers/``
    2. Add an instance here
    """
    return ParserRegistry(
        [
            AcuCobolParser(),
            BanditParser(workspace),
            ClangTidyParser(),
            PmdParser(),
            RuffParser(workspace),
            SimianParser(),
        ]
    )
