from __future__ import annotations

from typing import List, TYPE_CHECKING

from colorama import Fore

from gherkin_runner.constants import MARKER_PENDING, MARKER_SKIPPED, MARKER_UNDEFINED
from gherkin_runner.model import Step, StepStatus


if TYPE_CHECKING:  # pragma: no cover
    from gherkin_runner.runner import Report


def _get_status_color(status: StepStatus) -> str:
    if status == StepStatus.FAILED:
        return Fore.RED
    elif status == StepStatus.PASSED:
        return Fore.GREEN
    elif status == StepStatus.PENDING:
        return Fore.YELLOW
    elif status == StepStatus.SKIPPED:
        return Fore.CYAN
    elif status == StepStatus.UNDEFINED:
        return Fore.MAGENTA

    return Fore.RESET


def step_to_text(step: Step, status: StepStatus, *, colors: bool = False) -> str:
    if status == StepStatus.PENDING:
        text = f'{MARKER_PENDING} - {step.original_text}'
    elif status == StepStatus.SKIPPED:
        text = f'{MARKER_SKIPPED} - {step.original_text}'
    elif status == StepStatus.UNDEFINED:
        text = f'{MARKER_UNDEFINED} - {step.original_text}'
    else:
        text = step.original_text

    if colors:
        text = f'{_get_status_color(status)}{text}{Fore.RESET}'

    lines = [text, *[f'\t{message}' for message in step.error_messages]]

    return '\n'.join(lines)


def format_report(report: Report) -> str:
    counts = [
        (report.skipped_steps, StepStatus.SKIPPED),
        (report.passed_steps, StepStatus.PASSED),
        (report.failed_steps, StepStatus.FAILED),
        (report.pending_steps, StepStatus.PENDING),
        (report.undefined_steps, StepStatus.UNDEFINED),
    ]

    breakdown: List[str] = [f'{count} {status.value}' for count, status in counts if count > 0]

    text = f'{report.scenario_count} scenarios\n{report.total_steps} steps'

    if len(breakdown) > 0:
        text = f'{text}({", ".join(breakdown)})'

    return text
