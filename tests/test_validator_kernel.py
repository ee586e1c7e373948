"""Tests for the validator kernel.

Covers verification, artifact inspection, the issue log and legacy tool
aliases. The model-calling agent loop is out of scope.
"""

import json
import logging

import pytest
from conftest import ARTIFACT, VALIDATOR_CORPUS

from medcorpus.engine import ValidatorKernel
from medcorpus.models import ValidationIssue, ValidatorTool


def make_validator(settings, artifact, corpus=VALIDATOR_CORPUS):
    text = artifact if isinstance(artifact, str) else json.dumps(artifact)
    return ValidatorKernel(corpus, text, settings=settings)


class TestDispatch:
    def test_handler_table_covers_every_tool(self):
        assert set(ValidatorKernel._HANDLERS) == set(ValidatorTool)

    def test_unknown_tool(self, validator):
        result = validator.execute("delete_everything", {})

        assert result.startswith("Unknown tool: delete_everything")
        assert "verify_value_exists" in result

    @pytest.mark.parametrize("name", [["report_issue"], None, 42])
    def test_non_string_tool_name(self, validator, name):
        assert validator.execute(name, {}).startswith("Unknown tool:")

    def test_legacy_read_document(self, validator):
        result = validator.execute("read_document", {"document_name": "CBC Report"})
        assert result.startswith("# Document Summary: CBC Report")

    def test_legacy_structured_json_with_section(self, validator):
        result = validator.execute("get_structured_json", {"section": "timeline"})
        assert result.startswith("# JSON Section: timeline")

    def test_legacy_structured_json_without_section(self, validator):
        result = validator.execute("get_structured_json", {})
        assert result.startswith("# JSON Structure Overview")


class TestSourceTools:
    def test_list_documents(self, validator):
        result = validator.execute("list_documents", {})

        assert "CBC Report" in result
        assert "Metabolic Panel" in result

    def test_document_summary(self, validator):
        result = validator.execute("get_document_summary", {"document_name": "CBC Report"})

        assert "**Sections Found:** 1" in result
        assert "**Dates Mentioned:** 2024-03-15" in result
        assert "## Key Values Extracted" in result
        # metadata only, not the table rows
        assert "| RBC |" not in result

    def test_document_summary_not_found(self, validator):
        result = validator.execute("get_document_summary", {"document_name": "Missing"})
        assert result.startswith('Document not found: "Missing"')

    def test_search_returns_plain_lines(self, validator):
        result = validator.execute("search_data", {"query": "Glucose"})

        assert "| Glucose | 105 *H | 70-100 | mg/dL |" in result
        assert "HbA1c" not in result

    def test_search_with_context_on_request(self, validator):
        result = validator.execute("search_data", {"query": "Glucose", "include_context": True})
        assert "HbA1c" in result


class TestVerifyValueExists:
    def test_verified(self, validator):
        result = validator.execute("verify_value_exists", {"marker": "Glucose"})

        assert "**Status:** VERIFIED" in result
        assert "[Metabolic Panel] | Glucose | 105 *H | 70-100 | mg/dL |" in result
        assert 'criticalFindings[1].marker: "Glucose"' in result
        assert validator.verified_markers() == ["Glucose"]

    def test_field_accuracy_match(self, validator):
        result = validator.execute("verify_value_exists", {"marker": "Glucose", "expected_value": "105"})

        assert '# Verification: "Glucose" = 105' in result
        assert "## Field Accuracy (criticalFindings)" in result
        assert "- Unit: MATCH (mg/dL)" in result
        assert "- Reference Range: MATCH (70-100)" in result
        assert '- Status: MATCH (source="high", json="high")' in result
        assert "ACTION REQUIRED" not in result

    def test_expected_value_matches_numbers(self, validator):
        result = validator.execute("verify_value_exists", {"marker": "WBC", "expected_value": "5.2"})
        assert "criticalFindings[0].value: 5.2" in result

    def test_field_accuracy_mismatch(self, settings):
        artifact = dict(ARTIFACT)
        artifact["criticalFindings"] = [
            {
                "marker": "WBC",
                "value": 5.2,
                "unit": "10^9/L",
                "status": "low",
                "referenceRange": "3.5-9.0",
            }
        ]
        result = make_validator(settings, artifact).execute("verify_value_exists", {"marker": "WBC"})

        assert '- Unit: MISMATCH - Source: "K/uL", JSON: "10^9/L"' in result
        assert "- Reference Range: MISMATCH - Source: 4.0-10.0, JSON: 3.5-9.0" in result
        assert '- Status: MISMATCH - Source: "high", JSON: "low"' in result
        assert "ACTION REQUIRED" in result

    def test_critical_status_counts_as_high(self, settings):
        artifact = dict(ARTIFACT)
        artifact["criticalFindings"] = [{"marker": "Glucose", "value": 105, "status": "critical"}]
        result = make_validator(settings, artifact).execute("verify_value_exists", {"marker": "Glucose"})

        assert '- Status: MATCH (source="high", json="critical")' in result

    def test_missing_from_json(self, validator):
        result = validator.execute("verify_value_exists", {"marker": "HbA1c"})

        assert "**Status:** MISSING FROM JSON" in result
        assert validator.verified_markers() == []

    def test_not_in_source(self, validator):
        result = validator.execute("verify_value_exists", {"marker": "borderline"})
        assert "**Status:** NOT IN SOURCE" in result

    def test_not_found(self, validator):
        result = validator.execute("verify_value_exists", {"marker": "Ferritin"})

        assert "**Status:** NOT FOUND" in result
        assert "## Source Data (0 matches)\nNo matches found" in result

    def test_verified_markers_kept_once(self, validator):
        validator.execute("verify_value_exists", {"marker": "Glucose"})
        validator.execute("verify_value_exists", {"marker": "WBC"})
        validator.execute("verify_value_exists", {"marker": "Glucose"})

        assert validator.verified_markers() == ["Glucose", "WBC"]


class TestArtifactInspection:
    def test_overview(self, validator):
        result = validator.execute("get_json_overview", {})

        assert "**Total Sections:** 5" in result
        assert "**Has Timeline:** Yes" in result
        assert "**Has Critical Findings:** Yes" in result
        assert "**Has Executive Summary:** Yes" in result
        assert "- **criticalFindings**: array[2 items]" in result
        assert "- **executiveSummary**: string" in result
        assert "- **diagnoses**: array[0 items]" in result

    def test_overview_object_field(self, settings):
        kernel = make_validator(settings, {"patient": {"age": 40, "sex": "F", "height": 170, "weight": 60}})
        result = kernel.execute("get_json_overview", {})

        assert "- **patient**: object{age, sex, height...}" in result
        assert "**Has Timeline:** NO - potential issue" in result

    @pytest.mark.parametrize("text", ["{not json", "[1, 2, 3]", ""])
    def test_malformed_artifact_degrades_to_empty(self, settings, text, caplog):
        with caplog.at_level(logging.WARNING):
            kernel = make_validator(settings, text)
        result = kernel.execute("get_json_overview", {})

        assert "**Total Sections:** 0" in result
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_section_summary_array(self, validator):
        result = validator.execute("get_json_section_summary", {"section": "criticalFindings"})

        assert "**Type:** Array" in result
        assert "**Count:** 2 items" in result
        assert "## Preview (first 2 items)" in result

    def test_section_summary_object(self, settings):
        kernel = make_validator(settings, {"summary": {"headline": "ok", "items": [1, 2]}})
        result = kernel.execute("get_json_section_summary", {"section": "summary"})

        assert "**Type:** Object" in result
        assert "- headline: ok" in result
        assert "- items: array[2]" in result

    def test_section_summary_scalar(self, validator):
        result = validator.execute("get_json_section_summary", {"section": "executiveSummary"})

        assert "**Type:** string" in result
        assert "**Value:** Patient has borderline glucose." in result

    def test_section_summary_not_found(self, validator):
        result = validator.execute("get_json_section_summary", {"section": "labs"})
        assert result == (
            'Section "labs" not found. Available: '
            "executiveSummary, criticalFindings, timeline, diagnoses, trends"
        )

    def test_check_value_in_json(self, validator):
        result = validator.execute("check_value_in_json", {"marker": "Glucose", "value": "105"})

        assert "**Marker Found:** YES" in result
        assert "**Value Found:** YES" in result
        assert "**Locations:** criticalFindings" in result

    def test_check_value_missing_marker(self, validator):
        result = validator.execute("check_value_in_json", {"marker": "Ferritin"})

        assert "**Marker Found:** NO" in result
        assert "**Locations:** Not found in standard locations" in result
        assert '**ACTION:** Marker "Ferritin" not found in JSON.' in result

    def test_check_value_numeric_argument(self, validator):
        result = validator.execute("check_value_in_json", {"marker": "Glucose", "value": 105})
        assert "**Value Found:** YES" in result


class TestTimelineChecks:
    def test_compare_date_ranges_warning(self, validator):
        result = validator.execute("compare_date_ranges", {})

        assert "- **Range:** 2020-06-10 to 2024-03-15" in result
        assert "- **Years covered:** 2024" in result
        assert "- **Status:** WARNING - Some years missing" in result
        assert "- **Missing Years:** 2020" in result
        assert "- **Coverage:** 50%" in result
        assert "ACTION REQUIRED" in result

    def test_compare_date_ranges_critical(self, settings):
        artifact = dict(ARTIFACT, timeline=[])
        result = make_validator(settings, artifact).execute("compare_date_ranges", {})

        assert "CRITICAL - More than 50% of years missing" in result
        assert "- **Years covered:** None" in result

    def test_compare_date_ranges_pass(self, settings):
        artifact = dict(ARTIFACT, timeline=[{"date": "2020-06-10"}, {"date": "2024-03-15"}])
        result = make_validator(settings, artifact).execute("compare_date_ranges", {})

        assert "- **Status:** PASS" in result
        assert "ACTION REQUIRED" not in result

    def test_timeline_like_field(self, settings):
        artifact = {"medicalTimeline": [{"date": "2020-06-10"}, {"date": "2024-03-15"}]}
        result = make_validator(settings, artifact).execute("compare_date_ranges", {})

        assert "- **Field:** medicalTimeline" in result
        assert "- **Status:** PASS" in result

    def test_compare_without_source_dates(self, settings):
        kernel = make_validator(settings, ARTIFACT, corpus="## [Note]\nno dates")
        assert kernel.execute("compare_date_ranges", {}).startswith("Cannot compare")

    def test_find_missing_timeline_years(self, validator):
        result = validator.execute("find_missing_timeline_years", {})

        assert result.startswith("# Missing Timeline Years")
        assert "- **2020**: 1 document(s), 1 event(s) - Documents: Metabolic Panel" in result
        assert "## Covered Years\n2024" in result

    def test_find_missing_timeline_years_complete(self, settings):
        artifact = dict(ARTIFACT, timeline=[{"date": "2020-01-01"}, {"date": "2024-12-01"}])
        result = make_validator(settings, artifact).execute("find_missing_timeline_years", {})

        assert "COMPLETE - All 2 years" in result


class TestIssueLog:
    def test_report_issue(self, validator):
        result = validator.execute(
            "report_issue",
            {
                "category": "missing_timeline",
                "severity": "critical",
                "description": "2020 missing",
                "json_location": "timeline",
            },
        )

        assert result.startswith("Issue logged: [CRITICAL] missing_timeline - 2020 missing")
        assert "Total issues: 1 (1 critical, 0 warnings)" in result
        assert validator.issues() == [
            ValidationIssue(
                category="missing_timeline",
                severity="critical",
                description="2020 missing",
                json_location="timeline",
            )
        ]

    def test_severity_defaults_to_warning(self, validator):
        result = validator.execute("report_issue", {"category": "wrong_value", "description": "x"})
        assert "[WARNING]" in result

    def test_severity_lowercased(self, validator):
        validator.execute("report_issue", {"category": "c", "severity": "Critical", "description": "d"})
        assert validator.issues()[0].severity == "critical"

    def test_report_issue_never_rejected(self, validator):
        result = validator.execute("report_issue", {})

        assert result.startswith("Issue logged:")
        assert len(validator.issues()) == 1

    @pytest.mark.parametrize("field", ["category", "severity", "description", "source_location", "json_location"])
    def test_null_fields_still_logged(self, validator, field):
        args = {"category": "missing_data", "severity": "critical", "description": "x"}
        args[field] = None
        result = validator.execute("report_issue", args)

        assert result.startswith("Issue logged:")
        assert len(validator.issues()) == 1

    def test_null_severity_defaults_to_warning(self, validator):
        validator.execute("report_issue", {"category": "c", "severity": None, "description": "d"})
        assert validator.issues()[0].severity == "warning"

    def test_null_category_and_description_become_empty(self, validator):
        validator.execute("report_issue", {"category": None, "severity": "info", "description": None})
        issue = validator.issues()[0]

        assert (issue.category, issue.description) == ("", "")

    def test_issues_returns_copy(self, validator):
        validator.execute("report_issue", {"category": "c", "description": "d"})
        validator.issues().clear()
        assert len(validator.issues()) == 1

    def test_summary_empty(self, validator):
        assert "No issues found yet" in validator.execute("get_validation_summary", {})

    def test_summary(self, validator):
        validator.execute("report_issue", {"category": "missing_timeline", "severity": "critical", "description": "a"})
        validator.execute("report_issue", {"category": "wrong_value", "severity": "warning", "description": "b"})
        validator.execute("report_issue", {"category": "missing_context", "severity": "info", "description": "c"})
        result = validator.execute("get_validation_summary", {})

        assert "**Total Issues:** 3" in result
        assert "- Critical: 1\n- Warnings: 1\n- Info: 1" in result
        assert "1. [CRITICAL] **missing_timeline**: a" in result
        assert "3. [INFO] **missing_context**: c" in result

    def test_complete_validation(self, validator):
        validator.execute("report_issue", {"category": "a", "severity": "critical", "description": "x"})
        validator.execute("report_issue", {"category": "b", "severity": "warning", "description": "y"})
        validator.execute("report_issue", {"category": "c", "severity": "warning", "description": "z"})
        result = validator.execute("complete_validation", {"status": "needs_revision", "summary": "Fix timeline"})

        assert result == "VALIDATION_COMPLETE|needs_revision|1|2|Fix timeline"

    def test_complete_validation_not_gated(self, validator):
        result = validator.execute("complete_validation", {"status": "pass", "summary": "ok"})
        assert result == "VALIDATION_COMPLETE|pass|0|0|ok"
