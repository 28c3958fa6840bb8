"""Tests for environment-based settings."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from pixdecode.config import LOG_FORMAT, Settings, configure_logging, get_settings


class TestSettings:
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings()
        assert settings.max_image_pixels == 16_777_216
        assert settings.max_file_size == 209_715_200
        assert settings.read_chunk_size == 65_536
        assert settings.log_level == "WARNING"

    def test_env_overrides(self) -> None:
        env = {"PIXDECODE_MAX_IMAGE_PIXELS": "1024", "pixdecode_log_level": "DEBUG"}
        with patch.dict(os.environ, env, clear=True):
            settings = get_settings()
        assert settings.max_image_pixels == 1024
        assert settings.log_level == "DEBUG"

    def test_limits_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(max_file_size=0)

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="TRACE")  # type: ignore[arg-type]


class TestConfigureLogging:
    def test_applies_level_and_format(self) -> None:
        with patch("pixdecode.config.logging.basicConfig") as basic_config:
            configure_logging(Settings(log_level="INFO"))
        basic_config.assert_called_once_with(level="INFO", format=LOG_FORMAT)

    def test_library_does_not_configure_root_on_import(self) -> None:
        import pixdecode.jpeg.decoder  # noqa: F401

        assert logging.getLogger("pixdecode.jpeg.decoder").handlers == []
