"""Tests for nonogram.core.config – environment-driven settings."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from nonogram.core.config import creations_dir, local_today, today_override, unlock_all_packs, user_data_dir


class TestUserDataDir:
    def test_default_under_home(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("NONOGRAM_HOME", raising=False)
        assert user_data_dir() == Path.home() / ".nonogram"

    def test_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("NONOGRAM_HOME", str(tmp_path))
        assert user_data_dir() == tmp_path

    def test_creations_live_under_data_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("NONOGRAM_HOME", str(tmp_path))
        assert creations_dir() == tmp_path / "creations"


class TestUnlockAll:
    @pytest.mark.parametrize("value, expected", [("1", True), ("0", False), ("", False)])
    def test_flag(self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool):
        monkeypatch.setenv("NONOGRAM_UNLOCK_ALL", value)
        assert unlock_all_packs() is expected

    def test_unset(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("NONOGRAM_UNLOCK_ALL", raising=False)
        assert unlock_all_packs() is False


class TestToday:
    def test_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("NONOGRAM_DATE", "2024-01-06")
        assert today_override() == date(2024, 1, 6)
        assert local_today() == date(2024, 1, 6)

    def test_no_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("NONOGRAM_DATE", raising=False)
        assert today_override() is None
        assert local_today() == date.today()

    def test_bad_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("NONOGRAM_DATE", "tomorrow")
        with pytest.raises(ValueError):
            today_override()
