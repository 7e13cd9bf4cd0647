import json

import pytest

from jwt_guard import VerifierSettings
from token_vectors import RS256_JWKS


def test_empty_config():
    settings = VerifierSettings.from_mapping({})

    assert settings.static_secret is None
    assert settings.jwks is None
    assert dict(settings.claim_validators) == {}


def test_mappings_are_taken_as_is():
    settings = VerifierSettings.from_mapping(
        {
            "JWT_SECRET": "secret",
            "JWT_JWKS": RS256_JWKS,
            "JWT_CLAIM_VALIDATORS": {"iss": "Tester", "aud": "www.test.com"},
        }
    )

    assert settings.static_secret == "secret"
    assert settings.jwks is RS256_JWKS
    assert list(settings.claim_validators) == ["iss", "aud"]


def test_json_strings_are_parsed():
    settings = VerifierSettings.from_mapping(
        {
            "JWT_JWKS": json.dumps(RS256_JWKS),
            "JWT_CLAIM_VALIDATORS": '{"iss": "Tester"}',
        }
    )

    assert settings.jwks == RS256_JWKS
    assert settings.claim_validators == {"iss": "Tester"}


@pytest.mark.parametrize(
    "config",
    [
        {"JWT_SECRET": 123},
        {"JWT_JWKS": "{not json"},
        {"JWT_JWKS": '{"no_keys": []}'},
        {"JWT_CLAIM_VALIDATORS": '["iss"]'},
    ],
)
def test_invalid_values(config):
    with pytest.raises(ValueError):
        VerifierSettings.from_mapping(config)
