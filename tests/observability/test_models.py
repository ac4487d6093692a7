"""Tests for prompt registry models."""

import pytest
from pydantic import ValidationError

from studybuddy.observability.prompt_registry.models import ModelConfig


class TestModelConfig:
    """Tests for ModelConfig."""

    def test_unset_values_are_omitted(self) -> None:
        config = ModelConfig(model="gpt-35-turbo", temperature=0.7)

        assert config.to_langfuse_config() == {"model": "gpt-35-turbo", "temperature": 0.7}

    def test_extra_is_merged(self) -> None:
        config = ModelConfig(model="gpt-35-turbo", max_tokens=800, extra={"response_format": "json"})

        assert config.to_langfuse_config() == {
            "model": "gpt-35-turbo",
            "max_tokens": 800,
            "response_format": "json",
        }

    @pytest.mark.parametrize("temperature", [-0.1, 2.5])
    def test_temperature_bounds(self, temperature: float) -> None:
        with pytest.raises(ValidationError):
            ModelConfig(model="m", temperature=temperature)

    def test_max_tokens_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ModelConfig(model="m", max_tokens=0)
