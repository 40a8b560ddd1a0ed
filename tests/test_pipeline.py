from analysis_model.core.containers import build_parser_registry
from analysis_model.domain.builder import IssueBuilder
from analysis_model.domain.report import Report
from analysis_model.modules.detector import ModuleDetector
from analysis_model.parsers.base import IssueParser, ParsingError
from analysis_model.parsers.reader import FileReaderFactory, StringReaderFactory
from analysis_model.parsers.registry import ParserRegistry
from analysis_model.services.fingerprint_service import FALLBACK_PREFIX
from analysis_model.services.pipeline_service import AnalysisPipeline


class FixedModuleDetector(ModuleDetector):
    def guess_module_name(self, absolute_path):
        return "core"


class CancelingParser(IssueParser):
    def parser_id(self) -> str:
        return "canceling"

    def parse(self, reader_factory):
        self.cancel()
        self.check_canceled()
        return Report()


def test_parses_fingerprints_and_resolves_modules(write_file, source_lines):
    source = write_file("src/greet.py", "\n".join(source_lines))
    log = StringReaderFactory(
        f"{source.as_posix()}:5:5: warning: call to eval is insecure [cert-msc30-c]\n"
        f"{source.as_posix()}:5:5: warning: call to eval is insecure [cert-msc30-c]\n",
        "clang-tidy.log",
    )
    pipeline = AnalysisPipeline(build_parser_registry(), detector=FixedModuleDetector())

    result = pipeline.run("clang-tidy", log)

    assert result.ok
    assert result.error is None
    report = result.report
    assert report.size() == 1
    issue = report[0]
    assert issue.has_fingerprint()
    assert not issue.fingerprint.startswith(FALLBACK_PREFIX)
    assert issue.module_name == "core"
    assert report.info_messages[:2] == (
        "Successfully parsed file clang-tidy.log",
        "-> found 1 issues (skipped 1 duplicates)",
    )
    assert "-> resolved module names for 1 issues" in report.info_messages


def test_modules_are_optional(write_file):
    pmd = write_file("pmd.xml", "<pmd><file name='/nowhere/A.java'><violation beginline='2'>x</violation></file></pmd>")

    result = AnalysisPipeline(build_parser_registry()).run("pmd", FileReaderFactory(pmd))

    assert result.ok
    issue = result.report[0]
    assert issue.fingerprint.startswith(FALLBACK_PREFIX)
    assert issue.module_name == "-"
    assert "- '/nowhere/A.java' file not found" in result.report.error_messages


def test_parsing_errors_become_failed_result():
    result = AnalysisPipeline(build_parser_registry()).run("pmd", StringReaderFactory("<other/>", "other.xml"))

    assert not result.ok
    assert result.report is None
    assert isinstance(result.error, ParsingError)
    assert result.error.file_name == "other.xml"
    assert not result.canceled


def test_cancellation_becomes_canceled_result():
    pipeline = AnalysisPipeline(ParserRegistry([CancelingParser()]))

    result = pipeline.run("canceling", StringReaderFactory(""))

    assert result.canceled
    assert not result.ok
    assert result.error is None


def test_existing_values_are_kept():
    issue = IssueBuilder().set_fingerprint("given").set_module_name("explicit").build()

    class SingleIssueParser(IssueParser):
        def parser_id(self) -> str:
            return "single"

        def parse(self, reader_factory):
            return Report([issue])

    result = AnalysisPipeline(ParserRegistry([SingleIssueParser()]), detector=FixedModuleDetector()).run(
        "single", StringReaderFactory("")
    )

    assert result.report[0].fingerprint == "given"
    assert result.report[0].module_name == "explicit"


def test_parser_is_usable_again_after_cancellation():
    registry = build_parser_registry()
    pipeline = AnalysisPipeline(registry)
    log = StringReaderFactory("[exec] A.CPY, line 3: Warning: x\n", "build.log")

    registry.pick("acu-cobol").cancel()
    assert pipeline.run("acu-cobol", log).canceled

    result = pipeline.run("acu-cobol", log)

    assert result.ok
    assert not result.canceled
    assert result.report.size() == 1


def test_late_cancellation_does_not_leak_into_next_run():
    class LateCancelParser(IssueParser):
        def parser_id(self) -> str:
            return "late"

        def parse(self, reader_factory):
            # Canceled after the last check: this parse completes normally
            self.cancel()
            return Report()

    parser = LateCancelParser()
    pipeline = AnalysisPipeline(ParserRegistry([parser]))

    assert pipeline.run("late", StringReaderFactory("")).ok
    parser.check_canceled()
