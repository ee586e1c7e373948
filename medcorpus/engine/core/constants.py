"""Constants for date extraction, completion gating and report ordering.

This module contains:
- Date validity bounds and month name lookup
- Required and expected analysis sections for the completion gate
- Preferred section order for the final report
- Value and unit patterns used when reading lab lines
"""

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------
MIN_YEAR = 1990
MAX_YEAR = 2030
CONTEXT_MAX_CHARS = 100

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# ---------------------------------------------------------------------------
# Completion gate
#
# Each entry is (label, keywords). A draft title satisfies the entry when its
# lowercase form contains any keyword. These map to the downstream structured
# fields, so a skipped section leaves those fields empty.
# ---------------------------------------------------------------------------
REQUIRED_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Executive Summary", ("executive summary",)),
    ("System-by-System Analysis", ("system",)),
    ("Medical History Timeline", ("timeline",)),
    ("Unified Root Cause Hypothesis", ("root cause", "unified")),
    ("Causal Chain", ("causal chain",)),
    ("Keystone Findings", ("keystone",)),
    ("Recommendations", ("recommendations",)),
    ("Missing Data", ("missing data", "data gaps", "blind spots")),
)

EXPECTED_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Competing Hypotheses", ("competing", "hypotheses")),
    ("Identified Diagnoses", ("diagnoses",)),
    ("Supplement Schedule", ("supplement", "schedule")),
    ("Prognosis / Future Outlook", ("prognosis", "outlook")),
    ("Questions for Doctor", ("questions for doctor", "doctor questions")),
)

COMPLETION_MARKER = "ANALYSIS_COMPLETE"
VALIDATION_MARKER = "VALIDATION_COMPLETE"
AUTO_SECTION_KEYWORD = "append"

# Preferred order of draft sections in the final report (substring match)
SECTION_ORDER = (
    "Executive Summary",
    "At a Glance",
    "The Big Picture",
    "Patient Context",
    "Key Metrics",
    "Critical Findings",
    "Urgent Findings",
    "Key Patterns",
    "Primary Clinical Frames",
    "System",
    "Diagnoses",
    "Timeline",
    "Root Cause",
    "Unified",
    "Causal Chain",
    "Keystone",
    "Cross-System",
    "Competing",
    "Integrative",
    "Prognosis",
    "Outlook",
    "Supplement",
    "Lifestyle",
    "Recommendations",
    "Questions for Doctor",
    "Missing Data",
    "Data Gaps",
)

# ---------------------------------------------------------------------------
# Lab values
# ---------------------------------------------------------------------------
LAB_UNIT_PATTERN = (
    r"mg/dL|g/dL|mmol/L|μmol/L|µmol/L|ng/mL|pg/mL|mIU/L|IU/mL|%|x10\^9/L|cells/μL"
)

SUMMARY_UNIT_PATTERN = r"mg/dL|mmol/L|%|g/dL|U/L|ng/mL|pg/mL|mIU/L|fL|K/uL|M/uL"

# Artifact fields that carry per-marker value details
VALUE_DETAIL_FIELDS = ("criticalFindings", "trends")

# Artifact fields searched by check_value_in_json
STANDARD_JSON_LOCATIONS = ("criticalFindings", "trends", "keyBiomarkers", "timeline", "diagnoses")
