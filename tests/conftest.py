"""Shared pytest fixtures for build-analyzer tests."""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def quiet_structlog():
    """Drop log output below CRITICAL so command output stays parseable."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()
