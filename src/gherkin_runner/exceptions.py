from typing import Optional


class FatalError(Exception):
    """Defect in a feature file or in step registration, aborts the whole run."""


class TableError(FatalError):
    line: str
    expected: int
    actual: int

    def __init__(self, line: str, *, expected: int, actual: int) -> None:
        self.line = line
        self.expected = expected
        self.actual = actual

        super().__init__(f'wrong number of fields in table row "{line.strip()}", expected {expected} fields but found {actual}')


class StepDefinitionError(FatalError):
    pattern: Optional[str]

    def __init__(self, message: str, *, pattern: Optional[str] = None) -> None:
        self.pattern = pattern

        if pattern is not None:
            message = f'{message} (pattern "{pattern}")'

        super().__init__(message)


class ArgumentError(FatalError):
    value: str

    def __init__(self, message: str, *, value: str) -> None:
        self.value = value

        super().__init__(f'{message}: "{value}"')


class Pending(Exception):
    """Raised from a step handler to mark the step, and the rest of the scenario, as not implemented yet."""
