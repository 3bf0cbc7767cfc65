from __future__ import annotations

import logging

from typing import List, Optional, Union

from gherkin_runner.exceptions import TableError
from gherkin_runner.model import Node, PrintableLine, Scenario, ScenarioOutline, Step
from gherkin_runner.text import (
    get_step_text,
    get_table_fields,
    create_table_row,
    is_background,
    is_examples,
    is_feature,
    is_scenario,
    is_scenario_outline,
)


logger = logging.getLogger(__name__)


class Parser:
    """Single pass, line by line, parser of gherkin text.

    Each line is classified and appended to `nodes`, which keeps the order of
    the source so the text can be reproduced when executing.
    """

    nodes: List[Node]
    background: Optional[Scenario]
    current: Optional[Union[Scenario, ScenarioOutline]]
    in_examples: bool

    def __init__(self) -> None:
        self.nodes = []
        self.background = None
        self.current = None
        self.in_examples = False

    @property
    def current_step(self) -> Optional[Step]:
        if self.current is None:
            return None

        return self.current.last_step()

    def parse(self, text: str) -> List[Node]:
        for line in text.splitlines():
            self.parse_line(line)

        return self.nodes

    def _open(self, node: Union[Scenario, ScenarioOutline]) -> None:
        self.in_examples = False
        self.nodes.append(node)
        self.current = node
        logger.debug(f'opened {node.kind.value}: {node.line.strip()}')

    def _printable(self, line: str) -> None:
        self.nodes.append(PrintableLine(line))

    def parse_line(self, line: str) -> None:
        step_text = get_step_text(line)
        fields = get_table_fields(line)

        if self.current is not None and step_text is not None:
            self.current.add_step(Step(step_text, original_text=line))
        elif is_scenario_outline(line):
            self._open(ScenarioOutline(line=line))
        elif is_scenario(line):
            self._open(Scenario(line=line))
        elif is_feature(line):
            self._printable(line)
        elif is_background(line):
            # held on the side, it is executed before each scenario and not on its own
            self.background = Scenario(line=line, is_background=True)
            self.current = self.background
            self.in_examples = False
            self._printable(line)
        elif is_examples(line):
            self._printable(line)
            self.in_examples = True
        elif self.in_examples and len(fields) > 0:
            self._printable(line)
            self._add_example(fields, line)
        elif self.current_step is not None and len(fields) > 0:
            self._printable(line)
            self.current_step.add_table_fields(fields, line)
        else:
            self._printable(line)

    def _add_example(self, fields: List[str], line: str) -> None:
        outline = self.current
        if not isinstance(outline, ScenarioOutline):
            return

        if outline.keys is None:
            outline.keys = fields
            return

        if len(fields) != len(outline.keys):
            raise TableError(line, expected=len(outline.keys), actual=len(fields))

        example = create_table_row(outline.keys, fields)
        scenario = outline.instantiate(example)
        self.nodes.append(scenario)
        logger.debug(f'instantiated scenario from example {example}')
