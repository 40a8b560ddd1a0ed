from __future__ import annotations

import logging

from analysis_model.core.config import settings
from analysis_model.domain.filtered_log import FilteredLog
from analysis_model.domain.models import Issue
from analysis_model.domain.report import Report
from analysis_model.fingerprint.full_text import FullTextFingerprint

logger = logging.getLogger(__name__)

FALLBACK_PREFIX = "FALLBACK-"
_MASK = 0xFFFFFFFF


def _string_hash(value: str) -> int:
    # Deterministic across processes, unlike the builtin hash() of str
    h = 0
    for char in value:
        h = (31 * h + ord(char)) & _MASK
    return h


def create_default_fingerprint(issue: Issue) -> str:
    """Positional fingerprint for issues whose source cannot be read."""
    total = 17
    for part in (
        issue.base_name,
        issue.type,
        issue.category,
        issue.severity.value,
        issue.origin,
        str(issue.line_start),
    ):
        total = (total * 37 + _string_hash(part)) & _MASK
    return f"{FALLBACK_PREFIX}{total:x}"


class FingerprintGenerator:
    """
    Assigns a fingerprint to every issue of a report that has none yet.
    """

    def run(self, algorithm: FullTextFingerprint, report: Report, charset: str | None = None) -> int:
        charset = charset or settings.DEFAULT_CHARSET
        log = FilteredLog(report, "Can't create fingerprints for some files:")

        algorithm.clear_cache()
        created = 0
        try:
            for issue in report:
                if not issue.has_fingerprint():
                    created += self._compute(issue, algorithm, charset, log)
        finally:
            algorithm.clear_cache()

        report.log_info("-> created fingerprints for %d issues (skipped %d issues)", created, report.size() - created)
        log.log_summary()
        logger.info("Created %d fingerprints for %d issues", created, report.size())
        return created

    @staticmethod
    def _compute(issue: Issue, algorithm: FullTextFingerprint, charset: str, log: FilteredLog) -> int:
        path = issue.absolute_path
        if issue.has_file_name() and issue.line_start > 0:
            try:
                issue.set_fingerprint(algorithm.compute(path, issue.line_start, charset))
                return 1
            except FileNotFoundError:
                log.log_error("- '%s' file not found", path)
            except (UnicodeDecodeError, LookupError):
                log.log_error("- '%s', provided encoding '%s' seems to be wrong", path, charset)
            except (OSError, ValueError) as e:
                log.log_error("- '%s', IO exception has been thrown: %s", path, e)
        elif issue.has_file_name():
            log.log_info("- '%s' has no line number, using fallback fingerprint", path)

        issue.set_fingerprint(create_default_fingerprint(issue))
        return 0
