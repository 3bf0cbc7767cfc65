from __future__ import annotations

import logging

from typing import Any, Dict, List, NoReturn, Optional

from gherkin_runner.exceptions import Pending


logger = logging.getLogger(__name__)


def pending() -> NoReturn:
    """Mark the currently executing step as pending, the remaining steps in
    the scenario will be skipped.
    """
    raise Pending()


class World:
    """Context passed as first argument to each step handler, it is created
    for each executed step and thrown away afterwards.
    """

    captures: List[str]
    table: List[Dict[str, str]]
    context: Optional[Any]
    failed: bool
    messages: List[str]

    def __init__(
        self,
        captures: List[str],
        table: Optional[List[Dict[str, str]]] = None,
        *,
        context: Optional[Any] = None,
    ) -> None:
        self.captures = captures
        self.table = table if table is not None else []
        self.context = context
        self.failed = False
        self.messages = []

    def error(self, message: Optional[str] = None, *args: Any) -> None:
        """Flag the step as failed, execution of the handler continues."""
        self.failed = True

        if message is None:
            return

        if len(args) > 0:
            try:
                message = message % args
            except (TypeError, ValueError):
                message = f'{message} {args!r}'

        self.messages.append(message)
        logger.debug(f'step reported error: {message}')

    def pending(self) -> NoReturn:
        pending()
