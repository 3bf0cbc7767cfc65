from importlib.metadata import version, PackageNotFoundError


try:
    __version__ = version('gherkin-runner')
except PackageNotFoundError:
    __version__ = 'unknown'
