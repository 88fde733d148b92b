"""Pytest configuration and fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up sortcheck loggers after each test to prevent name collisions."""
    yield

    # Remove all sortcheck loggers from registry
    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("sortcheck")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def write_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""
    import textwrap

    def _write(content: str, name: str = "suite.yaml"):
        p = tmp_path / name
        p.write_text(textwrap.dedent(content))
        return p

    return _write
