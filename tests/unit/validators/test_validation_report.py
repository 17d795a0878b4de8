"""Unit tests for the validation report."""

from congestion_tax.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)


class TestValidationIssue:
    """Test issue rendering."""

    def test_str_without_context(self):
        issue = ValidationIssue(
            severity=ValidationSeverity.ERROR,
            field="segments",
            message="No segment covers 05:00-05:59",
            value="05:00",
        )

        assert str(issue) == "[ERROR] segments: No segment covers 05:00-05:59"

    def test_str_with_context(self):
        issue = ValidationIssue(
            severity=ValidationSeverity.WARNING,
            field="segments",
            message="Segments overlap",
            value="06:00",
            context={"segments": "1, 2"},
        )

        assert str(issue) == "[WARNING] segments: Segments overlap (segments=1, 2)"


class TestValidationReport:
    """Test collecting and summarising issues."""

    def test_empty_report(self):
        report = ValidationReport()

        assert report.is_valid()
        assert report.summary() == "No issues found"
        assert report.format() == "Validation successful - no issues found"

    def test_counts(self):
        report = ValidationReport()
        report.add_error("segments", "Price table is empty", [])
        report.add_warning("tollFreeDays.publicHolidays", "Holiday listed 2 times", "2021-04-02")
        report.add_warning("singleCharge.type", "Only the 'highest' rule is applied", "lowest")
        report.add_info("tollFreeVehicles", "Cars are listed", "car")

        assert report.error_count == 1
        assert report.warning_count == 2
        assert report.info_count == 1
        assert not report.is_valid()
        assert report.summary() == "1 error(s), 2 warning(s), 1 info message(s)"

    def test_warnings_do_not_invalidate(self):
        report = ValidationReport()
        report.add_warning("segments", "Segments overlap", "06:00")

        assert report.is_valid()

    def test_filter_orders_by_severity(self):
        report = ValidationReport()
        report.add_info("a", "info", None)
        report.add_error("b", "error", None)
        report.add_warning("c", "warning", None)

        assert [i.field for i in report.filter(ValidationSeverity.INFO)] == ["b", "c", "a"]
        assert [i.field for i in report.filter(ValidationSeverity.WARNING)] == ["b", "c"]

    def test_merge(self):
        first = ValidationReport()
        first.add_error("a", "error", None)
        second = ValidationReport()
        second.add_warning("b", "warning", None)

        first.merge(second)

        assert [i.field for i in first.issues] == ["a", "b"]

    def test_format_respects_min_severity(self):
        report = ValidationReport()
        report.add_error("segments", "Price table is empty", [])
        report.add_info("tollFreeVehicles", "Cars are listed", "car")

        text = report.format(ValidationSeverity.WARNING)

        assert "ERRORS:" in text
        assert "[ERROR] segments: Price table is empty" in text
        assert "INFOS:" not in text
