from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for settings tests", exc_type=ImportError)
pytest.importorskip("PySide6.QtTest", reason="Qt test helpers not available", exc_type=ImportError)

from PySide6.QtTest import QSignalSpy
from PySide6.QtWidgets import QApplication

from iCrop.errors import SettingsLoadError, SettingsValidationError
from iCrop.gui.ui.widgets.crop import CropTuning
from iCrop.settings.manager import SettingsManager, default_settings_path


def test_settings_manager_roundtrip(tmp_path: Path, qapp: QApplication) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()
    assert settings_path.exists()
    assert manager.get("crop.handle_radius") == 15.0
    spy = QSignalSpy(manager.settingsChanged)
    manager.set("crop.handle_radius", 20)
    qapp.processEvents()
    assert spy.count() == 1
    assert manager.get("crop.handle_radius") == 20
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["crop"]["handle_radius"] == 20


def test_nested_updates_preserve_defaults(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    manager.set("ui.show_size_label", False)
    assert manager.get("ui.show_size_label") is False
    assert manager.get("ui.theme") is None
    assert manager.get("crop.min_size") == 10.0


def test_missing_key_returns_default(tmp_path: Path) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    assert manager.get("crop.nothing", 7) == 7
    assert manager.get("schema.deeper") is None


def test_crop_tuning_from_settings(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(
        json.dumps({"schema": "iCrop/settings@1", "crop": {"default_fraction": 0.25, "min_size": 20}}),
        encoding="utf-8",
    )
    manager = SettingsManager(path=settings_path)
    manager.load()
    tuning = manager.crop_tuning()
    assert tuning == CropTuning(default_fraction=0.25, min_size=20.0)


def test_invalid_value_is_rejected_and_not_persisted(tmp_path: Path, qapp: QApplication) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()
    spy = QSignalSpy(manager.settingsChanged)
    with pytest.raises(SettingsValidationError):
        manager.set("crop.min_size", 0)
    with pytest.raises(SettingsValidationError):
        manager.set("crop.corner_radius", 4)
    with pytest.raises(SettingsValidationError):
        manager.set("ui.theme", "dark")
    assert spy.count() == 0
    assert manager.get("crop.min_size") == 10.0
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert "corner_radius" not in stored["crop"]


def test_load_rejects_wrong_schema(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"schema": "other@2"}), encoding="utf-8")
    with pytest.raises(SettingsValidationError):
        SettingsManager(path=settings_path).load()


def test_load_rejects_non_object(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SettingsValidationError):
        SettingsManager(path=settings_path).load()


def test_load_reports_unreadable_file(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsLoadError):
        SettingsManager(path=settings_path).load()


@pytest.mark.skipif(
    os.name == "nt" or sys.platform == "darwin", reason="XDG paths apply to Linux only"
)
def test_default_path_follows_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_settings_path() == tmp_path / "iCrop" / "settings.json"
