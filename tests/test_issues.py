from epr.validation.issues import ValidationCategory, ValidationIssues, ValidationSeverity


def test_empty_collector_is_valid():
    issues = ValidationIssues()
    assert issues.is_valid()
    assert not issues.is_fatal()
    assert not issues.has_issues()
    assert issues.first_fatal() is None
    assert len(issues) == 0


def test_errors_alone_are_not_fatal():
    issues = ValidationIssues().add_error(ValidationCategory.TECHNICAL, "bad cell")
    assert not issues.is_fatal()
    assert not issues.is_valid()
    assert issues.has_issues()


def test_a_single_fatal_makes_the_run_fatal():
    issues = ValidationIssues()
    issues.add_error(ValidationCategory.TECHNICAL, "bad cell")
    issues.add_fatal(ValidationCategory.BUSINESS, "wrong registration", {"expected": "A", "actual": "B"})
    issues.add_fatal(ValidationCategory.TECHNICAL, "second fatal")

    assert issues.is_fatal()
    assert issues.first_fatal().message == "wrong registration"
    assert issues.first_fatal().context == {"expected": "A", "actual": "B"}


def test_filters_by_severity_and_category():
    issues = ValidationIssues()
    issues.add_error(ValidationCategory.TECHNICAL, "e1")
    issues.add_fatal(ValidationCategory.BUSINESS, "f1")
    issues.add_error(ValidationCategory.BUSINESS, "e2")

    assert [i.message for i in issues.get_issues_by_severity(ValidationSeverity.ERROR)] == ["e1", "e2"]
    assert [i.message for i in issues.get_issues_by_category(ValidationCategory.BUSINESS)] == ["f1", "e2"]


def test_merge_preserves_order():
    first = ValidationIssues().add_error(ValidationCategory.TECHNICAL, "a")
    second = ValidationIssues().add_fatal(ValidationCategory.TECHNICAL, "b")

    first.merge(second)

    assert [i.message for i in first.get_all_issues()] == ["a", "b"]
    assert len(second) == 1


def test_get_all_issues_returns_a_copy():
    issues = ValidationIssues().add_error(ValidationCategory.TECHNICAL, "a")
    issues.get_all_issues().clear()
    assert len(issues) == 1


def test_issue_serialises_with_plain_values():
    issue = ValidationIssues().add_fatal(ValidationCategory.TECHNICAL, "boom").get_all_issues()[0]
    assert issue.model_dump(mode="json") == {
        "severity": "fatal",
        "category": "technical",
        "message": "boom",
        "context": {},
    }
