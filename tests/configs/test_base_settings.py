"""
Test suite for the shared settings base class.

System role: Verification of log level parsing
"""

import pytest
from pydantic import ValidationError

from studybuddy.configs.base import BaseSettings


class TestLogLevel:
    """Test suite for the log_level field."""

    def test_default_is_info(self) -> None:
        assert BaseSettings(_env_file=None).log_level == "INFO"

    def test_lowercase_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert BaseSettings(_env_file=None).log_level == "WARNING"

    def test_unknown_level_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BaseSettings(_env_file=None, log_level="VERBOSE")
