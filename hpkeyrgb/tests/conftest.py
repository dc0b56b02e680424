from __future__ import annotations

import os
import tempfile

import pytest


def _hardware_opted_in() -> bool:
    return os.environ.get("HPKEYRGB_HW_TESTS") == "1"


# Safety default: during pytest, avoid reading the user's real config.json.
if not _hardware_opted_in():
    os.environ.setdefault(
        "HPKEYRGB_CONFIG_DIR",
        tempfile.mkdtemp(prefix="hpkeyrgb-test-config-"),
    )


# Safety default: running pytest should never scan real USB devices unless
# explicitly opted in.
if not _hardware_opted_in():
    os.environ.setdefault("HPKEYRGB_DISABLE_USB_SCAN", "1")


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point config lookups at an empty temp directory and return the config.json path."""

    cfg_dir = tmp_path / "cfg"
    cfg_dir.mkdir()
    monkeypatch.setenv("HPKEYRGB_CONFIG_DIR", str(cfg_dir))
    monkeypatch.delenv("HPKEYRGB_CONFIG_PATH", raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return cfg_dir / "config.json"
