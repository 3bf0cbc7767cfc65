from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Union
from dataclasses import dataclass, field

from gherkin_runner.exceptions import TableError
from gherkin_runner.text import create_table_row, replace_placeholders


class StepStatus(Enum):
    PASSED = 'passed'
    FAILED = 'failed'
    PENDING = 'pending'
    SKIPPED = 'skipped'
    UNDEFINED = 'undefined'


class NodeKind(Enum):
    SCENARIO = 'scenario'
    BACKGROUND = 'background'
    SCENARIO_OUTLINE = 'scenario outline'
    PRINTABLE = 'printable'


@dataclass
class Step:
    match_text: str
    original_text: str = field(default='')
    is_pending: bool = field(default=False)
    has_error: bool = field(default=False)
    error_messages: List[str] = field(default_factory=list)
    table_keys: Optional[List[str]] = field(default=None)
    table_rows: List[Dict[str, str]] = field(default_factory=list)

    def reset(self) -> None:
        self.is_pending = False
        self.has_error = False
        self.error_messages = []

    def add_table_fields(self, fields: List[str], line: str) -> None:
        """The first row after a step holds the column keys, every following row
        must have the same number of fields.
        """
        if self.table_keys is None:
            self.table_keys = fields
            return

        if len(fields) != len(self.table_keys):
            raise TableError(line, expected=len(self.table_keys), actual=len(fields))

        self.table_rows.append(create_table_row(self.table_keys, fields))


@dataclass
class Scenario:
    line: str = field(default='')
    steps: List[Step] = field(default_factory=list)
    is_background: bool = field(default=False)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.BACKGROUND if self.is_background else NodeKind.SCENARIO

    def add_step(self, step: Step) -> None:
        self.steps.append(step)

    def last_step(self) -> Optional[Step]:
        if len(self.steps) < 1:
            return None

        return self.steps[-1]


@dataclass
class ScenarioOutline:
    line: str = field(default='')
    steps: List[Step] = field(default_factory=list)
    keys: Optional[List[str]] = field(default=None)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.SCENARIO_OUTLINE

    def add_step(self, step: Step) -> None:
        self.steps.append(step)

    def last_step(self) -> Optional[Step]:
        if len(self.steps) < 1:
            return None

        return self.steps[-1]

    def instantiate(self, example: Dict[str, str]) -> Scenario:
        scenario = Scenario(line=replace_placeholders(self.line, example))

        for template in self.steps:
            step = Step(
                replace_placeholders(template.match_text, example),
                original_text=replace_placeholders(template.original_text, example),
            )

            if template.table_keys is not None:
                step.table_keys = list(template.table_keys)
                step.table_rows = [{key: replace_placeholders(value, example) for key, value in row.items()} for row in template.table_rows]

            scenario.add_step(step)

        return scenario


@dataclass
class PrintableLine:
    line: str

    @property
    def kind(self) -> NodeKind:
        return NodeKind.PRINTABLE

    def last_step(self) -> Optional[Step]:
        return None


Node = Union[Scenario, ScenarioOutline, PrintableLine]
