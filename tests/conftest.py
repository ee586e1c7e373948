"""Pytest configuration and shared fixtures."""

import json

import pytest

from medcorpus.config import Settings
from medcorpus.engine import AnalystKernel, ValidatorKernel

# Extracted content mimicking real pipeline output
ANALYST_CORPUS = """## [CBC Report]
Date: 2024-03-15
Complete Blood Count Results:
| WBC | 5.2 | 4.0-10.0 | K/uL |
| RBC | 4.8 | 4.5-5.5 | M/uL |
| Hemoglobin | 14.2 | 12.0-16.0 | g/dL |

## [Metabolic Panel]
Date: 2020-06-10
| Glucose | 105 | 70-100 | mg/dL |
| HbA1c | 5.7 | 4.0-5.6 | % |

## [Thyroid Panel]
Date: 2022-09-01
| TSH | 2.5 | 0.4-4.0 | mIU/L |
"""

VALIDATOR_CORPUS = """## [CBC Report]
Date: 2024-03-15
| WBC | 5.2 *H | 4.0-10.0 | K/uL |
| RBC | 4.8 | 4.5-5.5 | M/uL |
| Hemoglobin | 14.2 | 12.0-16.0 | g/dL |

## [Metabolic Panel]
Date: 2020-06-10
| Glucose | 105 *H | 70-100 | mg/dL |
| HbA1c | 5.7 | 4.0-5.6 | % |
"""

ARTIFACT = {
    "executiveSummary": "Patient has borderline glucose.",
    "criticalFindings": [
        {
            "marker": "WBC",
            "value": 5.2,
            "unit": "K/uL",
            "status": "high",
            "referenceRange": {"min": 4.0, "max": 10.0},
        },
        {
            "marker": "Glucose",
            "value": 105,
            "unit": "mg/dL",
            "status": "high",
            "referenceRange": {"min": 70, "max": 100},
        },
    ],
    "timeline": [{"date": "2024-03-15", "event": "CBC Report"}],
    "diagnoses": [],
    "trends": [],
}

REQUIRED_TITLES = [
    "Executive Summary",
    "System-by-System Analysis",
    "Medical History Timeline",
    "Unified Root Cause Hypothesis",
    "Causal Chain",
    "Keystone Findings",
    "Recommendations",
    "Missing Data",
]

EXPECTED_TITLES = [
    "Competing Hypotheses",
    "Identified Diagnoses",
    "Supplement Schedule",
]


@pytest.fixture
def settings():
    """Default thresholds, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def analyst(settings):
    return AnalystKernel(ANALYST_CORPUS, settings=settings)


@pytest.fixture
def artifact_text():
    return json.dumps(ARTIFACT)


@pytest.fixture
def validator(settings, artifact_text):
    return ValidatorKernel(VALIDATOR_CORPUS, artifact_text, settings=settings)


def write_sections(kernel, titles):
    for title in titles:
        kernel.execute("update_analysis", {"section": title, "content": f"{title} content."})


def satisfy_gate(kernel):
    """Drive an analyst kernel over the sample corpus until completion is allowed."""
    kernel.execute("read_document", {"document_name": "CBC Report"})
    kernel.execute("read_document", {"document_name": "Metabolic Panel"})
    for query in ("glucose", "TSH", "hemoglobin"):
        kernel.execute("search_data", {"query": query})
    kernel.execute("get_date_range", {})
    kernel.execute("extract_timeline_events", {})
    write_sections(kernel, REQUIRED_TITLES + EXPECTED_TITLES)
