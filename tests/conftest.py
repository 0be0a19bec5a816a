"""Shared fixtures: a throwaway site tree that is also the working directory."""
from __future__ import annotations

import pytest

from datacascade.data import config as config_module
from datacascade.domain.models import CascadeConfig


@pytest.fixture
def site(tmp_path, monkeypatch):
    """Empty site directory with an ``src`` input root; cwd is the site root."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "src").mkdir()
    return tmp_path


@pytest.fixture
def make_config():
    def _make(**overrides) -> CascadeConfig:
        values = {
            "dir": {"input": "src", "data": "_data"},
            "data_template_engine": None,
        }
        values.update(overrides)
        return CascadeConfig(**values)

    return _make


@pytest.fixture(autouse=True)
def _reset_config():
    config_module.reset_config()
    yield
    config_module.reset_config()
