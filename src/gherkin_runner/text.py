from __future__ import annotations

import re

from typing import Dict, List, Optional, Sequence

from gherkin_runner.constants import (
    PATTERN_STEP,
    PATTERN_SCENARIO_OUTLINE,
    PATTERN_SCENARIO,
    PATTERN_FEATURE,
    PATTERN_BACKGROUND,
    PATTERN_EXAMPLES,
    PATTERN_TABLE_ROW,
)


def get_step_text(line: str) -> Optional[str]:
    """Returns the matchable text of a step line, with keyword and surrounding
    white spaces removed, or `None` if the line is not a step.
    """
    match = PATTERN_STEP.match(line)
    if match is None:
        return None

    return match.group(2)


def _line_matches(pattern: re.Pattern[str], line: str) -> bool:
    return pattern.search(line) is not None


def is_scenario_outline(line: str) -> bool:
    return _line_matches(PATTERN_SCENARIO_OUTLINE, line)


def is_scenario(line: str) -> bool:
    return _line_matches(PATTERN_SCENARIO, line)


def is_feature(line: str) -> bool:
    return _line_matches(PATTERN_FEATURE, line)


def is_background(line: str) -> bool:
    return _line_matches(PATTERN_BACKGROUND, line)


def is_examples(line: str) -> bool:
    return _line_matches(PATTERN_EXAMPLES, line)


def get_table_fields(line: str) -> List[str]:
    """Split a table row, `|a|b|`, into its trimmed fields.

    An empty list is returned for anything that isn't a table row.
    """
    if PATTERN_TABLE_ROW.match(line) is None:
        return []

    fields = line.strip().split('|')[1:-1]

    return [field.strip() for field in fields]


def create_table_row(keys: Sequence[str], fields: Sequence[str]) -> Dict[str, str]:
    return {key: fields[index] for index, key in enumerate(keys)}


def replace_placeholders(text: str, example: Dict[str, str]) -> str:
    for key, value in example.items():
        text = text.replace(f'<{key}>', value)

    return text
