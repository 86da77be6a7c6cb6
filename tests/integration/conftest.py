"""Shared fixtures for integration tests."""

import os

import pytest


@pytest.fixture
def credentials() -> tuple[str, str]:
    return os.environ["FIVETRAN_API_KEY"], os.environ["FIVETRAN_API_SECRET"]
