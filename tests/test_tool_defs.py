"""Tests for published tool definitions."""

import pytest

from medcorpus.mcp import ANALYST_TOOL_DEFINITIONS, VALIDATOR_TOOL_DEFINITIONS, get_tool_definition
from medcorpus.models import AnalystTool, ValidatorTool

ALL_DEFINITIONS = ANALYST_TOOL_DEFINITIONS + VALIDATOR_TOOL_DEFINITIONS


def test_one_definition_per_analyst_tool():
    names = [d["name"] for d in ANALYST_TOOL_DEFINITIONS]
    assert sorted(names) == sorted(t.value for t in AnalystTool)


def test_one_definition_per_validator_tool():
    names = [d["name"] for d in VALIDATOR_TOOL_DEFINITIONS]
    assert sorted(names) == sorted(t.value for t in ValidatorTool)


@pytest.mark.parametrize("definition", ALL_DEFINITIONS, ids=lambda d: d["name"])
def test_schema_shape(definition):
    schema = definition["inputSchema"]

    assert definition["description"]
    assert schema["type"] == "object"
    assert set(schema.get("required", [])) <= set(schema["properties"])


def test_complete_analysis_lists_required_sections():
    definition = get_tool_definition("complete_analysis", ANALYST_TOOL_DEFINITIONS)
    assert "Executive Summary" in definition["description"]
    assert "Missing Data" in definition["description"]


def test_lookup_unknown():
    assert get_tool_definition("nope", VALIDATOR_TOOL_DEFINITIONS) is None
