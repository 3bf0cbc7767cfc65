from __future__ import annotations

import logging

from typing import Any, Dict, Iterable, List, TYPE_CHECKING
from pathlib import Path, PurePath

from gherkin_runner import arguments
from gherkin_runner.constants import FEATURE_FILE_SUFFIX, STEP_FILE_SUFFIX
from gherkin_runner.world import pending


if TYPE_CHECKING:  # pragma: no cover
    from gherkin_runner.runner import Runner


logger = logging.getLogger(__name__)

IGNORE_PATTERNS = [
    '.*',
    'node_modules',
    '__pycache__',
]


def _is_ignored(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts

    return any(PurePath(part).match(pattern) for part in parts[:-1] for pattern in IGNORE_PATTERNS)


def _find_files(paths: Iterable[Path], suffix: str) -> List[Path]:
    files: List[Path] = []

    for path in paths:
        if path.is_dir():
            files.extend(sorted(file for file in path.rglob(f'*{suffix}') if not _is_ignored(file, path)))
        elif path.suffix == suffix:
            files.append(path)
        else:
            logger.warning(f'ignoring {path.as_posix()}, not a {suffix} file or a directory')

    return files


def find_feature_files(paths: Iterable[Path]) -> List[Path]:
    return _find_files(paths, FEATURE_FILE_SUFFIX)


def find_step_files(paths: Iterable[Path]) -> List[Path]:
    return _find_files(paths, STEP_FILE_SUFFIX)


def create_step_globals(runner: Runner) -> Dict[str, Any]:
    """Names available in a step module, all bound to `runner`."""
    return {
        'step': runner.step,
        'given': runner.given,
        'when': runner.when,
        'then': runner.then,
        'set_up': runner.set_up,
        'tear_down': runner.tear_down,
        'pending': pending,
        'ArgumentKind': arguments.ArgumentKind,
        'int8': arguments.int8,
        'int16': arguments.int16,
        'int32': arguments.int32,
        'int64': arguments.int64,
        'float32': arguments.float32,
        'float64': arguments.float64,
    }


def exec_file(path: Path, step_globals: Dict[str, Any]) -> None:
    source = path.read_text(encoding='utf-8')
    code = compile(source, path.as_posix(), 'exec')

    step_globals.update({'__file__': path.as_posix(), '__name__': path.stem})

    exec(code, step_globals)


def load_step_modules(runner: Runner, paths: Iterable[Path]) -> int:
    """Execute every step module found in `paths`, registering their steps in `runner`.

    Returns the number of registered step definitions.
    """
    before = len(runner.registry)

    for step_file in find_step_files(paths):
        logger.debug(f'loading steps from {step_file.as_posix()}')
        exec_file(step_file, create_step_globals(runner))

    registered = len(runner.registry) - before
    logger.info(f'registered {registered} steps')

    return registered
