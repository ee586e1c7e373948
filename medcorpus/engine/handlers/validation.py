"""Validator tool handlers.

Handles:
- verify_value_exists: Is a marker in the source, the artifact, or both?
- get_json_overview / get_json_section_summary: Artifact structure
- check_value_in_json: Marker/value presence in the artifact
- compare_date_ranges / find_missing_timeline_years: Timeline coverage
- report_issue / get_validation_summary / complete_validation: Issue log
"""

import json
import logging
from typing import Any

from ...models import (
    CheckValueParams,
    CompleteValidationParams,
    EmptyParams,
    IssueSeverity,
    JsonSectionParams,
    ReportIssueParams,
    ValidationIssue,
    VerificationStatus,
    VerifyValueParams,
)
from ..core.artifact import (
    RANGE_BOUNDS,
    ArtifactValueDetails,
    SourceLabLine,
    artifact_timeline,
    describe_value,
    extract_value_details,
    find_marker_in_artifact,
    normalize_unit,
    parse_number,
    parse_source_lab_line,
    timeline_dates,
    timeline_years,
)
from ..core.constants import STANDARD_JSON_LOCATIONS, VALIDATION_MARKER
from .base import ValidatorContext, missing_parameter

logger = logging.getLogger(__name__)

_STATUS_DETAIL = {
    VerificationStatus.VERIFIED: "Value exists in both source and JSON",
    VerificationStatus.MISSING_FROM_JSON: "Value in source but NOT in JSON (potential data loss)",
    VerificationStatus.NOT_IN_SOURCE: "Value in JSON but NOT in source (potential fabrication)",
    VerificationStatus.NOT_FOUND: "Value not found in either source or JSON",
}

# Reference range bounds closer than this are considered equal
RANGE_TOLERANCE = 0.1


# ============ VERIFICATION ============


def _verification_status(in_source: bool, in_json: bool) -> VerificationStatus:
    if in_source and in_json:
        return VerificationStatus.VERIFIED
    if in_source:
        return VerificationStatus.MISSING_FROM_JSON
    if in_json:
        return VerificationStatus.NOT_IN_SOURCE
    return VerificationStatus.NOT_FOUND


def compare_fields(src: SourceLabLine, details: ArtifactValueDetails) -> tuple[list[str], bool]:
    """Compare unit, reference range and status of a source line and an artifact entry.

    Returns:
        (check lines, whether any field mismatched)
    """
    checks: list[str] = []
    mismatch = False

    if src.unit and details.unit:
        if normalize_unit(src.unit) == normalize_unit(details.unit):
            checks.append(f"- Unit: MATCH ({src.unit})")
        else:
            checks.append(f'- Unit: MISMATCH - Source: "{src.unit}", JSON: "{details.unit}"')
            mismatch = True
    elif src.unit or details.unit:
        checks.append(f'- Unit: Source="{src.unit or "(none)"}", JSON="{details.unit or "(none)"}"')

    if src.ref_range and (details.ref_min or details.ref_max):
        bounds = RANGE_BOUNDS.search(src.ref_range)
        if bounds:
            src_min, src_max = parse_number(bounds.group(1)), parse_number(bounds.group(2))
            json_min, json_max = parse_number(details.ref_min), parse_number(details.ref_max)
            min_ok = src_min is not None and json_min is not None and abs(src_min - json_min) < RANGE_TOLERANCE
            max_ok = src_max is not None and json_max is not None and abs(src_max - json_max) < RANGE_TOLERANCE
            if min_ok and max_ok:
                checks.append(f"- Reference Range: MATCH ({src.ref_range})")
            else:
                checks.append(
                    f"- Reference Range: MISMATCH - Source: {bounds.group(1)}-{bounds.group(2)}, "
                    f"JSON: {details.ref_min}-{details.ref_max}"
                )
                mismatch = True
        else:
            checks.append(
                f'- Reference Range: Source="{src.ref_range}", JSON="{details.ref_min}-{details.ref_max}"'
            )

    if src.status and details.status:
        src_status = src.status.lower()
        json_status = details.status.lower()
        # critical findings are flagged high in the source
        normalized = "high" if json_status == "critical" else json_status
        if src_status in (json_status, normalized):
            checks.append(f'- Status: MATCH (source="{src.status}", json="{details.status}")')
        else:
            checks.append(f'- Status: MISMATCH - Source: "{src.status}", JSON: "{details.status}"')
            mismatch = True

    return checks, mismatch


def _field_accuracy(ctx: ValidatorContext, marker: str) -> str:
    needle = marker.lower()
    parsed = []
    for section in ctx.corpus.sections:
        for line in section.content.split("\n"):
            if needle in line.lower() and "|" in line:
                lab_line = parse_source_lab_line(line.strip())
                if lab_line:
                    parsed.append(lab_line)

    details = extract_value_details(ctx.artifact, marker)
    if not parsed or details is None:
        return ""

    checks, mismatch = compare_fields(parsed[0], details)
    if not checks:
        return ""

    block = f"\n\n## Field Accuracy ({details.location})\n" + "\n".join(checks)
    if mismatch:
        block += (
            "\n\nACTION REQUIRED: Unit, reference range, or status in JSON does not match source. "
            "Use report_issue() to flag accuracy errors."
        )
    return block


def handle_verify_value_exists(params: dict[str, Any], ctx: ValidatorContext) -> str:
    """Check a marker against both the source and the artifact.

    When found in both, the marker is remembered as verified and the field
    accuracy of the artifact entry is compared with the source lab line.
    """
    p = VerifyValueParams.model_validate(params)
    marker = p.marker.strip()
    if not marker:
        return missing_parameter("verify_value_exists", "marker")

    needle = marker.lower()
    source_matches = [
        f"[{section.name}] {line.strip()[:150]}"
        for section in ctx.corpus.sections
        for line in section.content.split("\n")
        if needle in line.lower()
    ]
    json_matches = find_marker_in_artifact(ctx.artifact, marker, p.expected_value)

    status = _verification_status(bool(source_matches), bool(json_matches))
    accuracy = ""
    if status == VerificationStatus.VERIFIED:
        ctx.verified_markers.setdefault(marker, None)
        accuracy = _field_accuracy(ctx, marker)

    title = f'# Verification: "{marker}"' + (f" = {p.expected_value}" if p.expected_value else "")
    source_block = "\n".join(f"- {m}" for m in source_matches) or "No matches found"
    json_block = "\n".join(f"- {m}" for m in json_matches) or "No matches found"
    return (
        f"{title}\n\n"
        f"**Status:** {status} - {_STATUS_DETAIL[status]}\n\n"
        f"## Source Data ({len(source_matches)} matches)\n{source_block}\n\n"
        f"## JSON Data ({len(json_matches)} matches)\n{json_block}{accuracy}"
    )


# ============ ARTIFACT INSPECTION ============


def handle_get_json_overview(params: dict[str, Any], ctx: ValidatorContext) -> str:
    """Top-level artifact fields with their type and size."""
    EmptyParams.model_validate(params)
    artifact = ctx.artifact

    def has(key: str) -> str:
        return "Yes" if key in artifact else "NO - potential issue"

    fields = "\n".join(f"- **{key}**: {describe_value(value)}" for key, value in artifact.items())
    return (
        "# JSON Structure Overview\n\n"
        f"**Total Sections:** {len(artifact)}\n"
        f"**Has Timeline:** {has('timeline')}\n"
        f"**Has Critical Findings:** {has('criticalFindings')}\n"
        f"**Has Executive Summary:** {has('executiveSummary')}\n\n"
        f"## Sections\n{fields or 'No sections'}\n\n"
        '**Next steps:** Use `get_json_section_summary("section")` or '
        '`check_value_in_json("marker")` to verify specific content.'
    )


def handle_get_json_section_summary(params: dict[str, Any], ctx: ValidatorContext) -> str:
    """Type, size and a short preview of one artifact field."""
    p = JsonSectionParams.model_validate(params)
    section = p.section.strip()
    if section not in ctx.artifact:
        return f'Section "{section}" not found. Available: {", ".join(ctx.artifact)}'

    value = ctx.artifact[section]
    if isinstance(value, list):
        preview = json.dumps(value[:2], indent=2)
        limit = ctx.settings.json_preview_chars
        if len(preview) > limit:
            preview = preview[:limit] + "..."
        return (
            f"# JSON Section: {section}\n\n"
            "**Type:** Array\n"
            f"**Count:** {len(value)} items\n\n"
            f"## Preview (first {min(2, len(value))} items)\n"
            f"```json\n{preview}\n```\n\n"
            '**To verify specific items:** Use `check_value_in_json("marker", "value")`'
        )

    if isinstance(value, dict):
        keys = list(value)
        lines = []
        for key in keys[:15]:
            item = value[key]
            if isinstance(item, list):
                lines.append(f"- {key}: array[{len(item)}]")
            elif isinstance(item, dict):
                lines.append(f"- {key}: object")
            else:
                lines.append(f"- {key}: {str(item)[:50]}")
        more = "\n... and more" if len(keys) > 15 else ""
        return (
            f"# JSON Section: {section}\n\n"
            "**Type:** Object\n"
            f"**Keys:** {len(keys)}\n\n"
            "## Structure\n" + "\n".join(lines) + more + "\n\n"
            '**To verify values:** Use `check_value_in_json("marker")`'
        )

    return (
        f"# JSON Section: {section}\n\n"
        f"**Type:** {describe_value(value)}\n"
        f"**Value:** {str(value)[:500]}"
    )


def handle_check_value_in_json(params: dict[str, Any], ctx: ValidatorContext) -> str:
    """Whether a marker (and optionally a value) occurs in the artifact, and where."""
    p = CheckValueParams.model_validate(params)
    marker = p.marker.strip()
    if not marker:
        return missing_parameter("check_value_in_json", "marker")

    serialized = json.dumps(ctx.artifact, ensure_ascii=False).lower()
    needle = marker.lower()
    marker_found = needle in serialized

    locations = [
        loc
        for loc in STANDARD_JSON_LOCATIONS
        if ctx.artifact.get(loc) and needle in json.dumps(ctx.artifact[loc], ensure_ascii=False).lower()
    ]

    lines = [
        "# Check Value in JSON",
        "",
        f"**Marker:** {marker}",
        f"**Value:** {p.value or '(not specified)'}",
        "",
        f"**Marker Found:** {'YES' if marker_found else 'NO'}",
    ]
    if p.value:
        value_found = p.value.lower() in serialized
        lines.append(f"**Value Found:** {'YES' if value_found else 'NO'}")
    lines.append(
        f"**Locations:** {', '.join(locations) if locations else 'Not found in standard locations'}"
    )
    if not marker_found:
        lines += [
            "",
            f'**ACTION:** Marker "{marker}" not found in JSON. '
            "Use report_issue() if this should be present.",
        ]
    return "\n".join(lines)


def _timeline_coverage(ctx: ValidatorContext) -> tuple[list[int], set[int], list[int]]:
    source_years = ctx.corpus.years_with_data()
    _, entries = artifact_timeline(ctx.artifact)
    json_years = timeline_years(entries)
    missing = [y for y in source_years if y not in json_years]
    return source_years, json_years, missing


def handle_compare_date_ranges(params: dict[str, Any], ctx: ValidatorContext) -> str:
    """Source date span against the artifact timeline."""
    EmptyParams.model_validate(params)
    source_range = ctx.corpus.date_range
    if source_range is None:
        return "Cannot compare: No dates found in source documents."

    field_name, entries = artifact_timeline(ctx.artifact)
    dates = timeline_dates(entries)
    source_years, json_years, missing = _timeline_coverage(ctx)

    if len(missing) > len(source_years) * 0.5:
        status = "CRITICAL - More than 50% of years missing"
    elif missing:
        status = "WARNING - Some years missing"
    else:
        status = "PASS"

    covered_pct = round((len(source_years) - len(missing)) / max(1, len(source_years)) * 100)
    json_years_text = ", ".join(map(str, sorted(json_years))) or "None"

    text = (
        "# Date Range Comparison\n\n"
        "## Source Data\n"
        f"- **Range:** {source_range.earliest} to {source_range.latest}\n"
        f"- **Span:** {source_range.years} years\n"
        f"- **Years with data:** {', '.join(map(str, source_years))}\n"
        f"- **Total events:** {len(ctx.corpus.timeline_events)}\n\n"
        "## JSON Timeline\n"
        f"- **Field:** {field_name or 'None'}\n"
        f"- **Range:** {dates[0] if dates else 'N/A'} to {dates[-1] if dates else 'N/A'}\n"
        f"- **Entries:** {len(entries)}\n"
        f"- **Years covered:** {json_years_text}\n\n"
        "## Comparison\n"
        f"- **Status:** {status}\n"
        f"- **Missing Years:** {', '.join(map(str, missing)) if missing else 'None'}\n"
        f"- **Coverage:** {covered_pct}%"
    )
    if missing:
        text += (
            f"\n\n**ACTION REQUIRED:** JSON timeline is missing {len(missing)} years of data. "
            "Use report_issue() to flag this."
        )
    return text


def handle_find_missing_timeline_years(params: dict[str, Any], ctx: ValidatorContext) -> str:
    """Source years that the artifact timeline does not cover."""
    EmptyParams.model_validate(params)
    source_years, json_years, missing = _timeline_coverage(ctx)

    if not missing:
        return (
            "# Timeline Year Coverage\n\n"
            f"**Status:** COMPLETE - All {len(source_years)} years with source data "
            "are represented in JSON timeline."
        )

    covered = [y for y in source_years if y in json_years]
    details = []
    for year in missing:
        docs = ctx.corpus.documents_by_year.get(year, [])
        events = sum(1 for e in ctx.corpus.timeline_events if e.year == year)
        more = "..." if len(docs) > 3 else ""
        details.append(
            f"- **{year}**: {len(docs)} document(s), {events} event(s) - "
            f"Documents: {', '.join(docs[:3])}{more}"
        )

    gap = round(len(missing) / max(1, len(source_years)) * 100)
    return (
        "# Missing Timeline Years\n\n"
        f"**Source has {len(source_years)} years of data.**\n"
        f"**JSON timeline covers {len(covered)} years.**\n"
        f"**Missing {len(missing)} years ({gap}% gap).**\n\n"
        "## Missing Years Detail\n" + "\n".join(details) + "\n\n"
        f"## Covered Years\n{', '.join(map(str, covered)) or 'None'}\n\n"
        "---\n\n"
        "**ACTION REQUIRED:** Use report_issue() to flag this timeline incompleteness."
    )


# ============ ISSUE LOG ============


def _count(ctx: ValidatorContext, severity: IssueSeverity) -> int:
    return sum(1 for issue in ctx.issues if issue.severity == severity)


def handle_report_issue(params: dict[str, Any], ctx: ValidatorContext) -> str:
    """Append an issue to the log. Never rejected; null fields become empty."""
    p = ReportIssueParams.model_validate(params)
    category = p.category or ""
    description = p.description or ""
    severity = (p.severity or "").strip().lower() or IssueSeverity.WARNING.value
    issue = ValidationIssue(
        category=category,
        severity=severity,
        description=description,
        source_location=p.source_location,
        json_location=p.json_location,
    )
    ctx.issues.append(issue)
    logger.info(f"Validation issue [{severity}] {category}: {description[:80]}")

    return (
        f"Issue logged: [{severity.upper()}] {category} - {description}\n\n"
        f"Total issues: {len(ctx.issues)} ({_count(ctx, IssueSeverity.CRITICAL)} critical, "
        f"{_count(ctx, IssueSeverity.WARNING)} warnings)"
    )


def handle_get_validation_summary(params: dict[str, Any], ctx: ValidatorContext) -> str:
    """All logged issues with counts per severity."""
    EmptyParams.model_validate(params)
    if not ctx.issues:
        return "# Validation Summary\n\nNo issues found yet. Continue validation checks."

    listing = "\n".join(
        f"{i}. [{issue.severity.upper()}] **{issue.category}**: {issue.description}"
        for i, issue in enumerate(ctx.issues, 1)
    )
    return (
        "# Validation Summary\n\n"
        f"**Total Issues:** {len(ctx.issues)}\n"
        f"- Critical: {_count(ctx, IssueSeverity.CRITICAL)}\n"
        f"- Warnings: {_count(ctx, IssueSeverity.WARNING)}\n"
        f"- Info: {_count(ctx, IssueSeverity.INFO)}\n\n"
        f"## All Issues\n{listing}"
    )


def handle_complete_validation(params: dict[str, Any], ctx: ValidatorContext) -> str:
    """Finish validation; the status is chosen by the agent."""
    p = CompleteValidationParams.model_validate(params)
    critical = _count(ctx, IssueSeverity.CRITICAL)
    warnings = _count(ctx, IssueSeverity.WARNING)
    logger.info(f"Validation complete: status={p.status}, {critical} critical, {warnings} warnings")
    return f"{VALIDATION_MARKER}|{p.status}|{critical}|{warnings}|{p.summary}"
