from pathlib import Path

import pytest

from gherkin_runner.runner import Runner

from .helpers import Context


@pytest.fixture
def runner() -> Runner:
    return Runner(output=None)


@pytest.fixture
def context() -> Context:
    return Context()


PROJECT = (Path(__file__).parent / 'project').resolve()

assert PROJECT.is_dir()
