import sys
import argparse
import logging

from typing import List, Optional

from gherkin_runner.cli import cli


def parse_arguments() -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='gherkin-runner')

    parser.add_argument(
        'paths',
        nargs='*',
        type=str,
        default=['features'],
        help='feature files, or directories with feature files, to run',
    )

    parser.add_argument(
        '--steps',
        action='append',
        type=str,
        default=None,
        help='file or directory with step modules, default is the steps directory next to the features',
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        required=False,
        default=False,
        help='do not color step output',
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        required=False,
        default=False,
        help='verbose output from runner',
    )

    parser.add_argument(
        '--no-verbose',
        nargs='+',
        type=str,
        default=None,
        help='name of loggers to disable',
    )

    parser.add_argument(
        '--version',
        action='store_true',
        required=False,
        default=False,
        help='print version and exit',
    )

    args = parser.parse_args()

    if args.version:
        from gherkin_runner import __version__

        print(__version__, file=sys.stderr)

        raise SystemExit(0)

    return args


def setup_logging(args: argparse.Namespace) -> None:
    level = logging.INFO if not args.verbose else logging.DEBUG

    logging.basicConfig(
        level=level,
        format='[%(asctime)s] %(levelname)s: %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    no_verbose: Optional[List[str]] = args.no_verbose

    if no_verbose is None:
        no_verbose = []

    for logger_name in no_verbose:
        if logger_name in logging.Logger.manager.loggerDict:
            logger = logging.getLogger(logger_name)
            logger.setLevel(logging.ERROR)
        else:
            print(f'!! logger "{logger_name}" does not exist', file=sys.stderr)


def main() -> None:
    args = parse_arguments()

    setup_logging(args)

    raise SystemExit(cli(args))


if __name__ == '__main__':  # pragma: no cover
    main()
