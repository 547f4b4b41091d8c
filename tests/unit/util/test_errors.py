"""Unit tests for utility-layer error paths."""

import pytest

from commentary.config import ObservabilitySettings, Settings
from commentary.util.di import ProviderBase, get_provider
from commentary.util.error import ConfigurationError, DependencyInjectionError
from commentary.util.observability import configure_logfire


class OnlyProdBase(ProviderBase):
    __mock_component__ = "search"


class OnlyProdProvider(OnlyProdBase):
    __is_mock__ = False


class TestGetProvider:
    def test_concrete_provider_returned_as_is(self):
        assert get_provider(OnlyProdProvider) is OnlyProdProvider

    def test_selects_production_subclass(self):
        assert get_provider(OnlyProdBase, use_mock=False) is OnlyProdProvider

    def test_missing_mock_raises(self):
        with pytest.raises(DependencyInjectionError):
            get_provider(OnlyProdBase, use_mock=True)


class TestConfigureLogfire:
    def test_forced_sending_without_token_raises(self):
        settings = Settings(
            _env_file=None,
            observability=ObservabilitySettings(send_to_logfire=True),
        )

        with pytest.raises(ConfigurationError):
            configure_logfire(settings)
