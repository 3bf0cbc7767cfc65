from __future__ import annotations

import re
import logging

from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar
from dataclasses import dataclass

from gherkin_runner.arguments import ArgumentKind, get_argument_kinds
from gherkin_runner.exceptions import StepDefinitionError


logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Callable[..., Any])


@dataclass(frozen=True)
class StepDefinition:
    pattern: re.Pattern[str]
    handler: Callable[..., Any]
    arguments: Tuple[ArgumentKind, ...]

    @classmethod
    def create(
        cls,
        pattern: str,
        handler: Callable[..., Any],
        arguments: Optional[Sequence[ArgumentKind]] = None,
    ) -> StepDefinition:
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise StepDefinitionError(f'invalid regular expression: {e}', pattern=pattern) from e

        if arguments is None:
            arguments = get_argument_kinds(handler)
        else:
            for argument in arguments:
                if not isinstance(argument, ArgumentKind):
                    raise StepDefinitionError(f'{argument!r} is not a supported argument kind', pattern=pattern)

        if len(arguments) != compiled.groups:
            raise StepDefinitionError(
                f'step handler declares {len(arguments)} arguments, but pattern has {compiled.groups} groups',
                pattern=pattern,
            )

        return cls(compiled, handler, tuple(arguments))

    def match(self, text: str) -> Optional[List[str]]:
        match = self.pattern.search(text)
        if match is None:
            return None

        # groups that did not take part in the match are passed as empty strings
        return [match.group(0), *[group if group is not None else '' for group in match.groups()]]

    def __str__(self) -> str:
        return self.pattern.pattern


class StepRegistry:
    definitions: List[StepDefinition]

    def __init__(self) -> None:
        self.definitions = []

    def __len__(self) -> int:
        return len(self.definitions)

    def register(
        self,
        pattern: str,
        handler: Callable[..., Any],
        arguments: Optional[Sequence[ArgumentKind]] = None,
    ) -> StepDefinition:
        definition = StepDefinition.create(pattern, handler, arguments)
        self.definitions.append(definition)

        logger.debug(f'registered step "{pattern}" -> {getattr(handler, "__name__", handler)!s} {[argument.value for argument in definition.arguments]}')

        return definition

    def step(self, pattern: str, arguments: Optional[Sequence[ArgumentKind]] = None) -> Callable[[T], T]:
        def decorator(func: T) -> T:
            self.register(pattern, func, arguments)
            return func

        return decorator

    def match(self, text: str) -> Optional[Tuple[StepDefinition, List[str]]]:
        """First registered definition that matches wins, later ones are never tried."""
        for definition in self.definitions:
            captures = definition.match(text)
            if captures is not None:
                return definition, captures

        return None
