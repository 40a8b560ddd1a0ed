from __future__ import annotations

import logging
from dataclasses import dataclass

from analysis_model.domain.report import Report
from analysis_model.fingerprint.full_text import FullTextFingerprint
from analysis_model.modules.detector import ModuleDetector
from analysis_model.parsers.base import ParsingCanceledError, ParsingError
from analysis_model.parsers.reader import ReaderFactory
from analysis_model.parsers.registry import ParserRegistry
from analysis_model.services.fingerprint_service import FingerprintGenerator
from analysis_model.services.module_service import ModuleResolver

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    report: Report | None = None
    error: ParsingError | None = None
    canceled: bool = False

    @property
    def ok(self) -> bool:
        return self.report is not None


class AnalysisPipeline:
    """
    Orchestrates: parse tool output → fingerprint issues → resolve modules.
    """

    def __init__(
        self,
        registry: ParserRegistry,
        detector: ModuleDetector | None = None,
        fingerprint: FullTextFingerprint | None = None,
    ):
        self.registry = registry
        self.detector = detector
        self.fingerprint = fingerprint or FullTextFingerprint()

    def run(self, parser_id: str, reader_factory: ReaderFactory, charset: str | None = None) -> ParseResult:
        parser = self.registry.pick(parser_id)
        context = {"origin": parser_id, "source": reader_factory.file_name}
        logger.info("Parsing %s ...", reader_factory.file_name, extra=context)

        try:
            report = parser.parse(reader_factory)
        except ParsingCanceledError:
            logger.info("Parsing canceled", extra=context)
            return ParseResult(canceled=True)
        except ParsingError as e:
            logger.warning("Parsing failed: %s", e, extra=context)
            return ParseResult(error=e)
        finally:
            # A cancel() that arrived after the last check must not leak into the next run
            parser.reset()

        report.log_info("Successfully parsed file %s", reader_factory.file_name)
        report.log_info("-> found %d issues (skipped %d duplicates)", report.size(), report.duplicates_size)

        fingerprints = FingerprintGenerator().run(self.fingerprint, report, charset)
        modules = 0
        if self.detector is not None:
            modules = ModuleResolver().run(report, self.detector)

        logger.info(
            "Analysis complete: %d issues",
            report.size(),
            extra={
                **context,
                "issues": report.size(),
                "duplicates": report.duplicates_size,
                "fingerprints": fingerprints,
                "modules": modules,
            },
        )
        return ParseResult(report=report)
