from __future__ import annotations

import logging

from analysis_model.domain.filtered_log import FilteredLog
from analysis_model.domain.report import Report
from analysis_model.modules.detector import ModuleDetector

logger = logging.getLogger(__name__)


class ModuleResolver:
    """
    Assigns module names to the issues of a report that have none yet,
    using a pluggable ModuleDetector. Explicit module names are kept.
    """

    def run(self, report: Report, detector: ModuleDetector) -> int:
        log = FilteredLog(report, "Can't resolve module names for some files:")
        resolved = 0
        for issue in report:
            if issue.has_module_name():
                continue
            try:
                module_name = detector.guess_module_name(issue.absolute_path)
            except Exception as e:
                log.log_exception(e, "- '%s' module detection failed", issue.absolute_path)
                continue
            if module_name and report.set_module_name(issue, module_name):
                resolved += 1

        report.log_info("-> resolved module names for %d issues", resolved)
        log.log_summary()
        logger.info("Resolved module names for %d issues", resolved)
        return resolved
