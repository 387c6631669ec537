"""
Shared pytest fixtures for shark tests.
"""

import logging

import pytest

from shark.numerics import Integrator


@pytest.fixture
def integrator() -> Integrator:
    """A fresh integrator with a budget large enough for smooth integrands."""
    return Integrator(1000)


@pytest.fixture
def counted():
    """
    Wraps an integrand and counts its evaluations.

    Example usage:
        def test_calls(counted):
            f = counted(lambda x, p: x)
            Integrator(10).integrate(f, None, 0, 1, 1e-8, 0)
            assert f.calls > 0
    """

    def wrap(fn):
        def counting(x, params):
            counting.calls += 1
            return fn(x, params)

        counting.calls = 0
        return counting

    return wrap


@pytest.fixture(autouse=True)
def reset_shark_logging():
    """Reset logging state before each test.

    Ensures tests start with a clean logging configuration:
    - Removes all handlers except NullHandler
    - Resets level to NOTSET (inherit from parent)
    """
    logger = logging.getLogger("shark")

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()

    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)

    yield

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)
