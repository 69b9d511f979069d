"""
Shared fixtures: keep every test away from the user's real config.
"""

import os

import pytest

from csvtable import config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for key in list(os.environ):
        if key.startswith("CSVTABLE_"):
            monkeypatch.delenv(key)
    config.reset_config()
    yield
    config.reset_config()
