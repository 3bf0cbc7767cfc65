from __future__ import annotations

import sys
import logging

from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, TextIO, Tuple, TypeVar, Union, cast
from dataclasses import dataclass, field
from pathlib import Path

from gherkin_runner.arguments import ArgumentKind, coerce_arguments
from gherkin_runner.exceptions import Pending
from gherkin_runner.inventory import find_feature_files
from gherkin_runner.model import Node, NodeKind, Scenario, Step, StepStatus
from gherkin_runner.parser import Parser
from gherkin_runner.registry import StepDefinition, StepRegistry
from gherkin_runner.reporter import format_report, step_to_text
from gherkin_runner.world import World


logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Callable[..., Any])


class ScenarioState(Enum):
    RUNNING = 'running'
    PENDING = 'pending'


@dataclass
class Report:
    scenario_count: int = field(default=0)
    passed_steps: int = field(default=0)
    failed_steps: int = field(default=0)
    pending_steps: int = field(default=0)
    skipped_steps: int = field(default=0)
    undefined_steps: int = field(default=0)

    @property
    def total_steps(self) -> int:
        return self.passed_steps + self.failed_steps + self.pending_steps + self.skipped_steps + self.undefined_steps

    @property
    def has_failures(self) -> bool:
        return self.failed_steps > 0

    def add(self, status: StepStatus) -> None:
        if status == StepStatus.PASSED:
            self.passed_steps += 1
        elif status == StepStatus.FAILED:
            self.failed_steps += 1
        elif status == StepStatus.PENDING:
            self.pending_steps += 1
        elif status == StepStatus.SKIPPED:
            self.skipped_steps += 1
        elif status == StepStatus.UNDEFINED:
            self.undefined_steps += 1

    def __add__(self, other: Report) -> Report:
        return Report(
            scenario_count=self.scenario_count + other.scenario_count,
            passed_steps=self.passed_steps + other.passed_steps,
            failed_steps=self.failed_steps + other.failed_steps,
            pending_steps=self.pending_steps + other.pending_steps,
            skipped_steps=self.skipped_steps + other.skipped_steps,
            undefined_steps=self.undefined_steps + other.undefined_steps,
        )

    def __str__(self) -> str:
        return format_report(self)


class Runner:
    """Owns the step registry, hooks and the parsed feature, and executes it.

    A runner can execute several feature texts after each other, the parsed
    state is replaced for each call to `parse`/`execute`.
    """

    registry: StepRegistry
    nodes: List[Node]
    background: Optional[Scenario]
    context: Optional[Any]
    output: Optional[TextIO]
    colors: bool

    _set_up: Optional[Callable[..., Any]]
    _tear_down: Optional[Callable[..., Any]]

    def __init__(self, output: Optional[TextIO] = sys.stdout, *, colors: bool = False) -> None:
        self.registry = StepRegistry()
        self.nodes = []
        self.background = None
        self.context = None
        self.output = output
        self.colors = colors
        self._set_up = None
        self._tear_down = None

    def register(
        self,
        pattern: str,
        handler: Callable[..., Any],
        arguments: Optional[Sequence[ArgumentKind]] = None,
    ) -> StepDefinition:
        return self.registry.register(pattern, handler, arguments)

    def step(self, pattern: str, arguments: Optional[Sequence[ArgumentKind]] = None) -> Callable[[T], T]:
        return self.registry.step(pattern, arguments)

    # keyword is not used when matching, these only exist for readability in step modules
    given = step
    when = step
    then = step

    def set_up(self, func: T) -> T:
        """Register a function that is called at the beginning of each scenario."""
        self._set_up = func
        return func

    def tear_down(self, func: T) -> T:
        """Register a function that is called at the end of each scenario."""
        self._tear_down = func
        return func

    def set_output(self, output: Optional[TextIO]) -> None:
        self.output = output

    def _write(self, text: str) -> None:
        if self.output is not None:
            self.output.write(f'{text}\n')

    def _call_hook(self, hook: Optional[Callable[..., Any]]) -> None:
        if hook is not None:
            hook(self.context)

    def parse(self, text: str) -> List[Node]:
        parser = Parser()
        self.nodes = []
        self.background = None

        parser.parse(text)

        self.nodes = parser.nodes
        self.background = parser.background

        return self.nodes

    def execute(self, text: str, context: Optional[Any] = None) -> Report:
        """Parse and execute gherkin text, a `FatalError` raised while parsing or
        executing aborts the run and propagates to the caller.
        """
        self.context = context
        self.parse(text)

        return self.execute_all()

    def execute_all(self) -> Report:
        report = Report()

        for node in self.nodes:
            report = report + self.execute_node(node)

        logger.debug(f'executed {report.scenario_count} scenarios with {report.total_steps} steps')

        return report

    def execute_node(self, node: Node) -> Report:
        if node.kind == NodeKind.PRINTABLE:
            self._write(node.line)
        elif node.kind == NodeKind.SCENARIO:
            return self.execute_scenario(cast(Scenario, node))

        # backgrounds are only executed as part of a scenario, and outlines
        # through the scenarios created from their examples
        return Report()

    def execute_scenario(self, scenario: Scenario) -> Report:
        self._call_hook(self._set_up)

        try:
            self.run_background()
            report = self.execute_steps(scenario)
            report.scenario_count += 1
        finally:
            self._call_hook(self._tear_down)

        return report

    def run_background(self) -> None:
        if self.background is not None:
            self.execute_steps(self.background)

    def execute_steps(self, scenario: Scenario) -> Report:
        report = Report()
        state = ScenarioState.RUNNING

        self._write(scenario.line)

        for step in scenario.steps:
            if state == ScenarioState.PENDING:
                step.reset()
                status = StepStatus.SKIPPED
            else:
                status = self.execute_step(step)

                if status == StepStatus.PENDING:
                    state = ScenarioState.PENDING

            report.add(status)
            self._write(step_to_text(step, status, colors=self.colors))

        return report

    def execute_step(self, step: Step) -> StepStatus:
        step.reset()

        found = self.registry.match(step.match_text)
        if found is None:
            logger.debug(f'no step definition matches "{step.match_text}"')
            return StepStatus.UNDEFINED

        definition, captures = found
        arguments = coerce_arguments(definition.arguments, captures)
        world = World(captures, step.table_rows, context=self.context)

        try:
            definition.handler(world, *arguments)
        except Pending:
            step.is_pending = True
        except AssertionError as e:
            world.error(str(e) or f'assertion failed in {getattr(definition.handler, "__name__", definition)}')

        step.has_error = world.failed
        step.error_messages = world.messages

        if step.is_pending:
            return StepStatus.PENDING
        elif step.has_error:
            return StepStatus.FAILED

        return StepStatus.PASSED

    def run_feature(self, path: Union[str, Path], context: Optional[Any] = None) -> Report:
        feature_file = Path(path)
        report = self.execute(feature_file.read_text(encoding='utf-8'), context)

        self._write(format_report(report))

        if report.has_failures:
            logger.error(f'{feature_file.as_posix()} has {report.failed_steps} failed steps')

        return report

    def run(self, directory: Union[str, Path] = 'features', context: Optional[Any] = None) -> List[Tuple[Path, Report]]:
        results: List[Tuple[Path, Report]] = []

        for feature_file in find_feature_files([Path(directory)]):
            results.append((feature_file, self.run_feature(feature_file, context)))

        return results
