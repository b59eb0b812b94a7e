"""Unit tests for API-key resolution, validation, and reset."""

from unittest.mock import patch

import pytest

from wallpapergen.core.gemini_service import ApiKeyNotFoundError
from wallpapergen.core.key_resolver import ApiKeyManager, ApiKeyStatus, mask_api_key
from wallpapergen.core.key_store import get_stored_api_key, set_stored_api_key

INVALID = RuntimeError("400 API key not valid. Please pass a valid API key.")


@pytest.fixture
def probe():
    with patch("wallpapergen.core.key_resolver.gemini_service.test_api_key") as mock_probe:
        mock_probe.return_value = True
        yield mock_probe


class TestMasking:
    def test_mask_long_key(self):
        assert mask_api_key("AIzaSyExample1234abcd") == "AIza…abcd"

    def test_mask_short_key(self):
        assert mask_api_key("short") == "•••••"

    def test_mask_empty(self):
        assert mask_api_key(None) == ""


class TestResolve:
    def test_nothing_available(self, key_manager):
        assert key_manager.resolve() == (None, "none")
        assert key_manager.status() == ApiKeyStatus(source="none")
        assert key_manager.status().has_key is False

    def test_host_key_fallback(self, settings_file):
        manager = ApiKeyManager(settings_file, host_key="AIza-host-key-0001")
        assert manager.resolve() == ("AIza-host-key-0001", "host")

    def test_stored_key_wins_over_host(self, settings_file):
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        manager = ApiKeyManager(settings_file, host_key="AIza-host-key-0001")
        assert manager.resolve() == ("AIza-stored-key-0002", "stored")

    def test_status_dict(self, settings_file):
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        manager = ApiKeyManager(settings_file)
        assert manager.status().to_dict() == {
            "source": "stored",
            "has_key": True,
            "masked": "AIza…0002",
        }

    def test_from_config(self, test_config):
        manager = ApiKeyManager.from_config(test_config)
        assert manager.settings_file == test_config.settings_file
        assert manager.host_key is None


class TestSaveAndValidate:
    def test_valid_key_is_stored(self, key_manager, settings_file, probe):
        status = key_manager.save_and_validate("  AIza-new-key-0003 ")
        probe.assert_called_once()
        assert probe.call_args.args[0] == "AIza-new-key-0003"
        assert get_stored_api_key(settings_file) == "AIza-new-key-0003"
        assert status.source == "stored"

    def test_invalid_key_is_not_stored(self, key_manager, settings_file, probe):
        probe.side_effect = INVALID
        with pytest.raises(RuntimeError):
            key_manager.save_and_validate("AIza-bad")
        assert get_stored_api_key(settings_file) is None

    def test_blank_key_rejected_without_probe(self, key_manager, probe):
        with pytest.raises(ValueError):
            key_manager.save_and_validate("   ")
        probe.assert_not_called()


class TestValidateCurrent:
    def test_no_key(self, key_manager, probe):
        with pytest.raises(ApiKeyNotFoundError):
            key_manager.validate_current()
        probe.assert_not_called()

    def test_valid_stored_key(self, key_manager, settings_file, probe):
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        assert key_manager.validate_current().source == "stored"

    def test_invalid_stored_key_is_cleared(self, key_manager, settings_file, probe):
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        probe.side_effect = INVALID
        with pytest.raises(RuntimeError):
            key_manager.validate_current()
        assert get_stored_api_key(settings_file) is None

    def test_invalid_stored_key_falls_back_to_host(self, settings_file, probe):
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        manager = ApiKeyManager(settings_file, host_key="AIza-host-key-0001")
        probe.side_effect = INVALID
        with pytest.raises(RuntimeError):
            manager.validate_current()
        assert manager.resolve() == ("AIza-host-key-0001", "host")

    def test_transient_error_keeps_stored_key(self, key_manager, settings_file, probe):
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        probe.side_effect = RuntimeError("503 UNAVAILABLE")
        with pytest.raises(RuntimeError):
            key_manager.validate_current()
        assert get_stored_api_key(settings_file) == "AIza-stored-key-0002"


class TestHandleFailure:
    def test_invalid_key_clears_store(self, key_manager, settings_file):
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        assert key_manager.handle_failure(INVALID) is True
        assert get_stored_api_key(settings_file) is None

    def test_other_error_keeps_store(self, key_manager, settings_file):
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        assert key_manager.handle_failure(RuntimeError("quota exceeded")) is False
        assert get_stored_api_key(settings_file) == "AIza-stored-key-0002"

    def test_invalid_host_key_reported(self, settings_file):
        manager = ApiKeyManager(settings_file, host_key="AIza-host-key-0001")
        assert manager.handle_failure(INVALID) is True
        assert manager.resolve()[1] == "host"

    def test_clear(self, key_manager, settings_file):
        assert key_manager.clear() is False
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        assert key_manager.clear() is True

    def test_failed_key_still_stored_is_cleared(self, key_manager, settings_file):
        set_stored_api_key(settings_file, "AIza-stored-key-0002")
        assert key_manager.handle_failure(INVALID, "AIza-stored-key-0002") is True
        assert get_stored_api_key(settings_file) is None

    def test_replaced_key_is_kept(self, key_manager, settings_file):
        set_stored_api_key(settings_file, "AIza-new-key-0003")
        assert key_manager.handle_failure(INVALID, "AIza-stored-key-0002") is True
        assert get_stored_api_key(settings_file) == "AIza-new-key-0003"
