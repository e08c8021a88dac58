"""
Tests for Settings validation.
"""

import pytest
from unittest.mock import patch

from curation_backend.config import Settings


class TestSettingsValidate:
    """Tests for Settings.validate."""

    def test_missing_api_key_with_ai_enabled_fails(self):
        with patch.object(Settings, "GOOGLE_API_KEY", ""), \
                patch.object(Settings, "CURATION_AI_ENABLED", True):
            with pytest.raises(ValueError, match="GOOGLE_API_KEY"):
                Settings.validate()

    def test_missing_api_key_with_ai_disabled_passes(self):
        with patch.object(Settings, "GOOGLE_API_KEY", ""), \
                patch.object(Settings, "CURATION_AI_ENABLED", False):
            Settings.validate()

    def test_negative_retries_rejected(self):
        with patch.object(Settings, "GOOGLE_API_KEY", "key"), \
                patch.object(Settings, "CURATION_MAX_RETRIES", -1):
            with pytest.raises(ValueError, match="CURATION_MAX_RETRIES"):
                Settings.validate()

    @pytest.mark.parametrize("environment,expected", [
        ("production", True),
        ("PRODUCTION", True),
        ("development", False),
    ])
    def test_is_production(self, environment, expected):
        with patch.object(Settings, "ENVIRONMENT", environment):
            assert Settings.is_production() is expected
