from pathlib import Path

import pytest
from pydantic import ValidationError

from devlog_sheets.config import load_settings


def test_load_settings_defaults_when_missing(tmp_path: Path):
    p = tmp_path / "missing.yaml"
    s = load_settings(p)
    assert s.sheet.tab_name == "RawLog"
    assert s.clock.timezone == "Australia/Sydney"
    assert s.clock.stale_after_hours == 6
    assert s.clock.stale_minutes == 10


def test_load_settings_from_yaml(tmp_path: Path):
    p = tmp_path / "config.yaml"
    p.write_text(
        """
sheet:
  tab_name: DevLog
clock:
  timezone: Europe/Amsterdam
  stale_minutes: 5
log_level: DEBUG
""".lstrip()
    )
    s = load_settings(p)
    assert s.sheet.tab_name == "DevLog"
    assert s.clock.tz.key == "Europe/Amsterdam"
    assert s.clock.stale_minutes == 5
    assert s.log_level == "DEBUG"


def test_load_settings_rejects_unknown_timezone(tmp_path: Path):
    p = tmp_path / "config.yaml"
    p.write_text("clock:\n  timezone: Nowhere/Special\n")
    with pytest.raises(ValidationError):
        load_settings(p)


def test_log_level_normalized_and_checked(tmp_path: Path):
    p = tmp_path / "config.yaml"
    p.write_text("log_level: debug\n")
    assert load_settings(p).log_level == "DEBUG"

    p.write_text("log_level: LOUD\n")
    with pytest.raises(ValidationError):
        load_settings(p)
