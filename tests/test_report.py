from analysis_model.domain.builder import IssueBuilder
from analysis_model.domain.models import DuplicationGroup, Severity
from analysis_model.domain.report import Report


def _issue(message="msg", file_name="a.py", line=1, severity=Severity.NORMAL, origin="tool", module=None):
    return (
        IssueBuilder()
        .set_file_name(file_name)
        .set_line_start(line)
        .set_message(message)
        .set_severity(severity)
        .set_origin(origin)
        .set_module_name(module)
        .build()
    )


def test_add_keeps_insertion_order():
    report = Report()
    first, second, third = _issue("1"), _issue("2"), _issue("3")
    for issue in (first, second, third):
        assert report.add(issue)

    assert [i.message for i in report] == ["1", "2", "3"]
    assert report.get(1) is second
    assert report[2] is third
    assert len(report) == report.size() == 3


def test_duplicates_are_counted_but_not_stored():
    report = Report()
    report.add(_issue("same"))
    # Different severity and origin, same content key
    assert not report.add(_issue("same", severity=Severity.HIGH, origin="other"))
    assert not report.add(_issue("same"))

    assert report.size() == 1
    assert report.duplicates_size == 2
    assert report.count_by_severity(Severity.HIGH) == 0


def test_add_all_preserves_order_and_merges_messages():
    other = Report([_issue("b"), _issue("c")])
    other.log_info("parsed %s", "other")
    other.log_error("broken line %d", 7)

    report = Report([_issue("a")])
    report.add_all(other, [_issue("d"), _issue("a")])

    assert [i.message for i in report] == ["a", "b", "c", "d"]
    assert report.duplicates_size == 1
    assert report.info_messages == ("parsed other",)
    assert report.error_messages == ("broken line 7",)
    assert report.has_errors()


def test_counters():
    report = Report(
        [
            _issue("1", severity=Severity.HIGH, origin="pmd"),
            _issue("2", severity=Severity.HIGH, origin="pmd"),
            _issue("3", severity=Severity.LOW, origin="ruff", module="core"),
        ]
    )

    assert report.count_by_severity(Severity.HIGH) == 2
    assert report.get_size_of(Severity.LOW) == 1
    assert report.count_by_severity(Severity.ERROR) == 0
    assert report.get_counts_by_severity() == {
        Severity.ERROR: 0,
        Severity.HIGH: 2,
        Severity.NORMAL: 0,
        Severity.LOW: 1,
    }
    assert report.origins == {"pmd", "ruff"}
    assert report.get_size_by_origin() == {"pmd": 2, "ruff": 1}
    assert report.modules == {"-", "core"}


def test_set_module_name_updates_counters():
    issue = _issue("1")
    report = Report([issue, _issue("2", module="core")])

    assert report.set_module_name(issue, "core")
    assert not report.set_module_name(issue, "other")

    assert issue.module_name == "core"
    assert report.get_size_by_module() == {"core": 2}
    assert report.modules == {"core"}


def test_filter_shares_instances():
    high = _issue("1", severity=Severity.HIGH)
    low = _issue("2", severity=Severity.LOW)
    error = _issue("3", severity=Severity.ERROR)
    report = Report([high, low, error])

    filtered = report.filter(lambda i: i.severity >= Severity.HIGH)

    assert list(filtered) == [high, error]
    assert filtered[0] is high
    assert report.size() == 3
    assert [i.message for i in report.by_severity(Severity.NORMAL)] == ["1", "3"]


def test_iteration_is_restartable():
    report = Report([_issue("1"), _issue("2")])
    assert list(report) == list(report)
    assert report.size() == 2


def test_distinct_properties():
    report = Report([_issue("1", file_name="b.py"), _issue("2", file_name="a.py"), _issue("3", file_name="b.py")])
    assert report.files == ["a.py", "b.py"]


def test_find_by_id_and_contains():
    issue = _issue("1")
    report = Report([issue])
    assert report.find_by_id(issue.id) is issue
    assert report.contains(_issue("1"))
    assert report.find_by_id("unknown") is None


def test_duplicates_of_uses_shared_group():
    group = DuplicationGroup("for i in range(10):")
    builder = IssueBuilder().set_additional_properties(group)
    first = builder.set_file_name("a.py").build()
    second = builder.set_file_name("b.py").build()
    unrelated = _issue("x")
    report = Report([first, second, unrelated])

    assert report.duplicates_of(first) == [second]
    assert report.duplicates_of(unrelated) == []
    assert first.additional_properties.code_fragment == "for i in range(10):"


def test_log_messages_are_formatted():
    report = Report()
    report.log_info("found %d issues in %s", 3, "a.py")
    report.log_error("100% broken")
    report.log_error("missing argument %s %s", "only-one")

    assert report.info_messages == ("found 3 issues in a.py",)
    assert report.error_messages[0] == "100% broken"
    assert report.error_messages[1] == "missing argument %s %s only-one"
