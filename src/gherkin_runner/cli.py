from __future__ import annotations

import os
import sys
import logging

from typing import List
from argparse import Namespace as Arguments
from pathlib import Path

from colorama import init

from gherkin_runner.constants import ENV_NO_COLOR
from gherkin_runner.exceptions import FatalError
from gherkin_runner.inventory import find_feature_files, load_step_modules
from gherkin_runner.runner import Report, Runner


logger = logging.getLogger(__name__)


def _use_colors(args: Arguments) -> bool:
    if args.no_color:
        return False

    return os.environ.get(ENV_NO_COLOR, 'false').lower() not in ['1', 'true', 'yes']


def get_step_paths(args: Arguments) -> List[Path]:
    if args.steps:
        return [Path(path) for path in args.steps]

    # default to a steps directory next to, or in, each feature path
    step_paths: List[Path] = []
    for path in [Path(path) for path in args.paths]:
        directory = path if path.is_dir() else path.parent
        step_path = directory / 'steps'

        if step_path.is_dir() and step_path not in step_paths:
            step_paths.append(step_path)

    return step_paths


def cli(args: Arguments) -> int:
    colors = _use_colors(args)

    # init colorama for ansi colors
    if colors:
        init()

    runner = Runner(sys.stdout, colors=colors)

    try:
        load_step_modules(runner, get_step_paths(args))
    except FatalError as e:
        logger.error(f'invalid step definition: {e}')
        return 2

    files = find_feature_files([Path(path) for path in args.paths])
    if len(files) < 1:
        logger.warning(f'no feature files found in {", ".join(args.paths)}')

    rc: int = 0
    total = Report()

    for file in files:
        try:
            report = runner.run_feature(file)
        except FatalError as e:
            logger.error(f'{file.as_posix()}: {e}')
            return 2

        total = total + report

        if report.has_failures:
            rc = 1

    logger.info(f'{len(files)} features, {total.scenario_count} scenarios, {total.failed_steps} failed steps')

    return rc
