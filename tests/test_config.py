from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from talentflow.application.session.assessment_session import FormConfig
from talentflow.core.config import FormSettings, LoggingSettings, Settings, UploadSettings
from talentflow.core.logging_setup import JsonFormatter


def test_form_settings_from_environment(monkeypatch):
    monkeypatch.setenv("FORM_VALIDATE_ON_CHANGE", "true")
    monkeypatch.setenv("FORM_AUTO_SAVE_INTERVAL_SECONDS", "5")
    monkeypatch.setenv("UPLOAD_MAX_SIZE_BYTES", "2048")

    settings = Settings()
    config = FormConfig.from_settings(settings.form, settings.upload)

    assert config.validate_on_change is True
    assert config.auto_save_interval_seconds == 5.0
    assert config.file_constraints.max_size_bytes == 2048


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        FormSettings(auto_save_interval_seconds=0)
    with pytest.raises(ValidationError):
        FormSettings(session_idle_timeout_seconds=-1)
    with pytest.raises(ValidationError):
        LoggingSettings(format="xml")
    with pytest.raises(ValidationError):
        Settings(app_env="moon")


def test_upload_defaults():
    upload = UploadSettings()
    assert upload.max_size_bytes == 10 * 1024 * 1024
    assert "image/*" in upload.allowed_types


def test_json_formatter_merges_extra_fields():
    record = logging.LogRecord("talentflow.test", logging.INFO, __file__, 1, "saved %s", ("x",), None)
    record.response_id = "r1"

    line = JsonFormatter().format(record)

    assert '"message": "saved x"' in line
    assert '"response_id": "r1"' in line
    assert '"level": "INFO"' in line
