"""Shared test fixtures for mdbridge."""

from datetime import datetime, timezone

import pytest

from mdbridge.config.models import MdBridgeConfig


@pytest.fixture
def sample_config():
    return MdBridgeConfig()


@pytest.fixture
def fixed_now():
    return datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Run from an empty directory with no user-global config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
    return tmp_path


@pytest.fixture
def sample_markdown():
    return (
        "# Project Setup\n"
        "\n"
        "The project setup is simple.\n"
        "\n"
        "## Install\n"
        "\n"
        "Run install first.\n"
    )
