"""
Tests for core.security and core.clock

Covers token issuing and verification, the site password check and
timezone handling of the clock.
"""

from dataclasses import replace
from datetime import timedelta

import jwt
import pytest

from hosting_scheduler_api.app.core.clock import Clock
from hosting_scheduler_api.app.core.exceptions import AuthError, ConfigurationError
from hosting_scheduler_api.app.core.security import (
    authenticate,
    create_access_token,
    decode_access_token,
)
from tests.conftest import SITE_PASSWORD


class TestTokens:
    def test_token_carries_claims_and_expiry(self, settings):
        token = create_access_token({"authenticated": True}, settings)

        payload = decode_access_token(token, settings)

        assert payload["authenticated"] is True
        assert "exp" in payload

    def test_expired_token_is_rejected(self, settings):
        token = create_access_token({"authenticated": True}, settings, expires_delta=timedelta(seconds=-10))

        assert decode_access_token(token, settings) is None

    def test_token_signed_with_other_key_is_rejected(self, settings):
        forged = jwt.encode({"authenticated": True}, "some-other-secret-key-of-adequate-size", algorithm="HS256")

        assert decode_access_token(forged, settings) is None

    def test_garbage_is_rejected(self, settings):
        assert decode_access_token("not.a.token", settings) is None

    def test_missing_secret_is_a_configuration_error(self, settings):
        with pytest.raises(ConfigurationError):
            create_access_token({"authenticated": True}, replace(settings, secret_key=""))


class TestAuthenticate:
    def test_correct_password_yields_valid_token(self, settings):
        token = authenticate(SITE_PASSWORD, settings)

        assert decode_access_token(token, settings)["authenticated"] is True

    @pytest.mark.parametrize("password", ["wrong", "", None])
    def test_wrong_password(self, settings, password):
        with pytest.raises(AuthError) as exc_info:
            authenticate(password, settings)

        assert exc_info.value.code == "invalid_credentials"
        assert exc_info.value.message == "Invalid password"

    def test_unconfigured_site_password(self, settings):
        with pytest.raises(ConfigurationError) as exc_info:
            authenticate(SITE_PASSWORD, replace(settings, site_password=""))

        assert exc_info.value.message == "Server configuration error"


class TestClock:
    def test_now_is_in_configured_zone(self):
        clock = Clock("America/Chicago")

        assert clock.now().tzinfo.key == "America/Chicago"

    def test_unknown_zone(self):
        with pytest.raises(ConfigurationError):
            Clock("Mars/Olympus_Mons")
