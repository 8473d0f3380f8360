"""
Configuration Tests
"""

import pytest
from pydantic import ValidationError

from catalog_api.config import Settings
from catalog_api.graphql import create_graphql_router

VALID_SECRET = "a" * 32


def make_settings(**overrides) -> Settings:
    values = {"secret_key": VALID_SECRET, **overrides}
    return Settings(_env_file=None, **values)


class TestSettings:
    def test_defaults(self):
        settings = make_settings()

        assert settings.token_algorithm == "HS256"
        assert settings.token_expire_minutes is None
        assert settings.default_user_password == "qwer"
        assert settings.allowed_origins_list == ["*"]

    @pytest.mark.parametrize(
        "secret",
        ["REPLACE_WITH_YOUR_GENERATED_SECRET_KEY", "change-me-" + "x" * 40, "short"],
    )
    def test_rejects_weak_secret(self, secret):
        with pytest.raises(ValidationError):
            make_settings(secret_key=secret)

    def test_log_level_is_normalised(self):
        assert make_settings(log_level="debug").log_level == "DEBUG"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            make_settings(log_level="loud")

    def test_rejects_non_positive_token_lifetime(self):
        with pytest.raises(ValidationError):
            make_settings(token_expire_minutes=0)

    def test_parses_origins(self):
        settings = make_settings(allowed_origins="http://a.test, http://b.test")

        assert settings.allowed_origins_list == ["http://a.test", "http://b.test"]

    def test_settings_are_immutable(self):
        settings = make_settings()

        with pytest.raises(ValidationError):
            settings.secret_key = "b" * 32

    def test_environment_is_normalised(self):
        settings = make_settings(environment="Production")

        assert settings.environment == "production"
        assert settings.is_production

    def test_rejects_unknown_environment(self):
        with pytest.raises(ValidationError):
            make_settings(environment="qa")


class TestGraphQLRouter:
    def test_ide_served_in_development(self):
        router = create_graphql_router(make_settings())

        assert router.graphql_ide == "apollo-sandbox"

    def test_ide_disabled_by_setting(self):
        router = create_graphql_router(make_settings(graphql_playground_enabled=False))

        assert router.graphql_ide is None

    def test_ide_never_served_in_production(self):
        router = create_graphql_router(make_settings(environment="production"))

        assert router.graphql_ide is None
