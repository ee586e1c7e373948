"""Structured artifact helpers for the validator kernel.

The artifact is the JSON text produced downstream of the analysis. It is
loaded once, tolerating malformed input, and then inspected read-only.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from .constants import VALUE_DETAIL_FIELDS

logger = logging.getLogger(__name__)

_FLAG = re.compile(r"\*{1,2}([HL])\b", re.IGNORECASE)
_FLAG_STRIP = re.compile(r"\s*\*{1,2}[HL]\b", re.IGNORECASE)
_RANGE = re.compile(r"\d+\.?\d*\s*[-–]\s*\d+\.?\d*")
_COMPARISON = re.compile(r"^[<>]\s*\d+")
_PAREN_NUMBER = re.compile(r"\(\s*\d+")
_SLASH_UNIT = re.compile(r"[a-zA-Z]/[a-zA-Z]")
_NAMED_UNIT = re.compile(r"^(%|Ratio|Pos/Neg)$", re.IGNORECASE)
_BRACKETS = re.compile(r"[()\[\]]")
RANGE_BOUNDS = re.compile(r"([\d,.]+)\s*[-–]\s*([\d,.]+)")


@dataclass(frozen=True)
class SourceLabLine:
    """Fields of a pipe-delimited lab line, e.g. ``| TSH | 5.2 *H | 0.4-4.0 | mIU/L |``."""

    marker: str
    value: str
    unit: str = ""
    ref_range: str = ""
    status: str = ""


@dataclass(frozen=True)
class ArtifactValueDetails:
    """Value details recorded for a marker in the artifact."""

    value: str
    unit: str
    ref_min: str
    ref_max: str
    status: str
    location: str


def load_artifact(text: str) -> dict[str, Any]:
    """Parse artifact JSON text into a dict.

    Malformed JSON, or JSON whose top level is not an object, yields an empty
    dict and a logged warning.
    """
    if not text or not text.strip():
        logger.warning("Empty artifact text, validating against an empty structure")
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Malformed artifact JSON, validating against an empty structure: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(
            f"Artifact JSON is a {type(data).__name__}, not an object; "
            "validating against an empty structure"
        )
        return {}
    return data


def describe_value(value: Any) -> str:
    """Short type/size description for overview listings."""
    if isinstance(value, list):
        return f"array[{len(value)} items]"
    if value is None:
        return "null"
    if isinstance(value, dict):
        keys = list(value)
        more = "..." if len(keys) > 3 else ""
        return f"object{{{', '.join(keys[:3])}{more}}}"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


def find_marker_in_artifact(
    artifact: dict[str, Any], marker: str, expected_value: str | None = None
) -> list[str]:
    """Paths in the artifact mentioning ``marker``.

    String leaves containing the marker match, keys containing the marker
    match (with their serialized value), and numeric leaves equal to
    ``expected_value`` match.
    """
    needle = marker.lower()
    found: list[str] = []

    def walk(obj: Any, path: str) -> None:
        if obj is None:
            return
        if isinstance(obj, str):
            if needle in obj.lower():
                found.append(f'{path}: "{obj[:100]}"')
        elif isinstance(obj, bool):
            return
        elif isinstance(obj, (int, float)):
            if expected_value and _number_text(obj) == expected_value:
                found.append(f"{path}: {_number_text(obj)}")
        elif isinstance(obj, list):
            for i, item in enumerate(obj):
                walk(item, f"{path}[{i}]")
        elif isinstance(obj, dict):
            for key, val in obj.items():
                if needle in str(key).lower():
                    found.append(f"{path}.{key}: {json.dumps(val)[:100]}")
                else:
                    walk(val, f"{path}.{key}" if path else str(key))

    walk(artifact, "")
    return found


def _number_text(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_source_lab_line(line: str) -> SourceLabLine | None:
    """Split a pipe-delimited source line into marker, value, unit, range and status.

    A ``*H``/``*L`` flag on the value column becomes status ``high``/``low``.
    Remaining columns are classified as reference range or unit by shape.
    Returns None when there are fewer than two columns.
    """
    parts = [p.strip() for p in line.split("|")]
    parts = [p for p in parts if p]
    if len(parts) < 2:
        return None

    value = parts[1]
    status = ""
    flag = _FLAG.search(value)
    if flag:
        status = "high" if flag.group(1).upper() == "H" else "low"
        value = _FLAG_STRIP.sub("", value, count=1).strip()

    unit = ""
    ref_range = ""
    for col in parts[2:]:
        is_range = bool(_RANGE.search(col) or _COMPARISON.search(col) or _PAREN_NUMBER.search(col))
        is_unit = bool(_SLASH_UNIT.search(col) or _NAMED_UNIT.match(col))

        if is_range and not ref_range:
            ref_range = _BRACKETS.sub("", col).strip()
        elif is_unit and not unit:
            unit = col
        elif not ref_range and not is_unit and re.search(r"\d", col):
            ref_range = _BRACKETS.sub("", col).strip()
        elif not unit and len(col) < 20 and not col.isdigit():
            unit = col

    if not value:
        return None
    return SourceLabLine(marker=parts[0], value=value, unit=unit, ref_range=ref_range, status=status)


def extract_value_details(artifact: dict[str, Any], marker: str) -> ArtifactValueDetails | None:
    """First ``criticalFindings``/``trends`` entry whose marker overlaps ``marker``."""
    needle = marker.lower()
    for location in VALUE_DETAIL_FIELDS:
        items = artifact.get(location)
        if not isinstance(items, list):
            continue
        for item in items:
            if not isinstance(item, dict):
                continue
            item_marker = item.get("marker")
            if not isinstance(item_marker, str):
                continue
            if needle not in item_marker.lower() and item_marker.lower() not in needle:
                continue

            ref_min = ref_max = ""
            ref = item.get("referenceRange")
            if isinstance(ref, dict):
                ref_min = _text(ref.get("min", ref.get("low")))
                ref_max = _text(ref.get("max", ref.get("high")))
            elif isinstance(ref, str):
                bounds = re.search(r"([\d.]+)\s*[-–]\s*([\d.]+)", ref)
                if bounds:
                    ref_min, ref_max = bounds.group(1), bounds.group(2)

            return ArtifactValueDetails(
                value=_text(item.get("value")),
                unit=_text(item.get("unit")),
                ref_min=ref_min,
                ref_max=ref_max,
                status=_text(item.get("status")),
                location=location,
            )
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _number_text(value)
    return str(value)


def normalize_unit(unit: str) -> str:
    """Lowercase, µ→u and no whitespace, for unit comparison."""
    return re.sub(r"\s+", "", unit.strip().lower().replace("µ", "u").replace("μ", "u"))


def parse_number(text: str) -> float | None:
    try:
        return float(text.replace(",", ""))
    except ValueError:
        return None


def artifact_timeline(artifact: dict[str, Any]) -> tuple[str | None, list[Any]]:
    """The artifact's timeline-like list and its field name.

    ``timeline`` wins; otherwise the first list field whose name contains
    "timeline". Returns ``(None, [])`` when there is none.
    """
    if isinstance(artifact.get("timeline"), list):
        return "timeline", artifact["timeline"]
    for key, value in artifact.items():
        if "timeline" in key.lower() and isinstance(value, list):
            return key, value
    return None, []


def timeline_dates(entries: list[Any]) -> list[str]:
    """Sorted ``date`` strings of timeline entries that have one."""
    dates = [
        e["date"] for e in entries if isinstance(e, dict) and isinstance(e.get("date"), str) and e["date"]
    ]
    return sorted(dates)


def timeline_years(entries: list[Any]) -> set[int]:
    """Years (first four characters of ``date``) covered by timeline entries."""
    years: set[int] = set()
    for date in timeline_dates(entries):
        prefix = date[:4]
        if prefix.isdigit():
            years.add(int(prefix))
    return years
