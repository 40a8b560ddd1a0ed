import pytest

from analysis_model.core.config import settings
from analysis_model.domain.models import DuplicationGroup, LineRange, Severity
from analysis_model.parsers.base import ParsingError
from analysis_model.parsers.reader import StringReaderFactory
from analysis_model.parsers.simian_parser import SimianParser

MATRIX_RUN = "C:/java/hudson/matrix/MatrixRun.java"
MAVEN_BUILD = "C:/java/hudson/maven/MavenBuild.java"

TWO_FILES = """<?xml version="1.0" encoding="UTF-8"?>
<simian version="2.2.4">
    <check failOnDuplication="true" ignoreCharacterCase="true" threshold="6">
        <set lineCount="6">
            <block sourceFile="C:\\java\\hudson\\maven\\MavenBuild.java" startLineNumber="92" endLineNumber="97"/>
            <block sourceFile="C:\\java\\hudson\\matrix\\MatrixRun.java" startLineNumber="61" endLineNumber="66"/>
        </set>
        <summary duplicateFileCount="2" duplicateLineCount="12" duplicateBlockCount="2" totalFileCount="2"/>
    </check>
</simian>
"""

TWO_SETS = """<simian version="2.2.4">
    <check threshold="6">
        <set lineCount="6">
            <block sourceFile="C:\\java\\hudson\\maven\\MavenBuild.java" startLineNumber="92" endLineNumber="97"/>
            <block sourceFile="C:\\java\\hudson\\matrix\\MatrixRun.java" startLineNumber="61" endLineNumber="66"/>
        </set>
        <set lineCount="60">
            <block sourceFile="C:\\java\\hudson\\maven\\MavenBuild.java" startLineNumber="93" endLineNumber="98"/>
            <block sourceFile="C:\\java\\hudson\\maven\\MavenBuild.java" startLineNumber="76" endLineNumber="81"/>
            <block sourceFile="C:\\java\\hudson\\maven\\Other.java" startLineNumber="10" endLineNumber="15"/>
        </set>
    </check>
</simian>
"""


def _parse(content, high=50, normal=25):
    return SimianParser(high, normal).parse(StringReaderFactory(content, "simian.xml"))


def test_finds_one_duplication_in_two_files():
    report = _parse(TWO_FILES)

    assert report.size() == 2
    first, second = report
    assert (first.file_name, first.line_start, first.line_end) == (MAVEN_BUILD, 92, 97)
    assert (second.file_name, second.line_start, second.line_end) == (MATRIX_RUN, 61, 66)
    assert first.severity == Severity.LOW
    assert first.category == first.type == "Duplicate Code"
    assert first.message == "Found duplicated code (6 lines)."
    assert first.description == ""
    assert first.origin == "simian"


def test_blocks_reference_each_other():
    first, second = _parse(TWO_FILES)

    assert isinstance(first.additional_properties, DuplicationGroup)
    assert first.additional_properties is second.additional_properties
    assert first.line_ranges == (LineRange(61, 66),)
    assert second.line_ranges == (LineRange(92, 97),)


def test_finds_two_duplications():
    report = _parse(TWO_SETS)

    assert report.size() == 5
    assert [(i.line_start, i.line_end) for i in report] == [(92, 97), (61, 66), (93, 98), (76, 81), (10, 15)]
    assert report[2].severity == Severity.HIGH
    assert report[2].additional_properties is not report[0].additional_properties
    assert report.duplicates_of(report[2]) == [report[3], report[4]]
    assert len(report[2].line_ranges) == 2


@pytest.mark.parametrize(
    ("high", "normal", "severity"),
    [
        (6, 5, Severity.HIGH),
        (7, 6, Severity.NORMAL),
        (100, 6, Severity.NORMAL),
        (100, 7, Severity.LOW),
    ],
)
def test_assigns_severity_by_thresholds(high, normal, severity):
    report = _parse(TWO_FILES, high, normal)

    assert report.size() == 2
    assert report[0].severity == severity


def test_default_thresholds_come_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "SIMIAN_HIGH_THRESHOLD", 6)
    monkeypatch.setattr(settings, "SIMIAN_NORMAL_THRESHOLD", 3)

    parser = SimianParser()

    assert parser.get_severity(6) == Severity.HIGH
    assert parser.get_severity(3) == Severity.NORMAL


def test_ignores_other_files():
    report = _parse('<?xml version="1.0"?><pmd><file name="a.java"/></pmd>')

    assert report.size() == 0
    assert report.info_messages == ("Skipped 'simian.xml': not a Simian report",)


def test_rejects_malformed_xml():
    with pytest.raises(ParsingError):
        _parse("<simian><check>")


def test_accepts_only_simian_reports():
    parser = SimianParser()
    assert parser.accepts(StringReaderFactory(TWO_FILES))
    assert not parser.accepts(StringReaderFactory("<pmd/>"))
