"""Tests for curl_auth.schemes module."""

import pytest

from curl_auth.schemes import (
    SchemeKind,
    SchemeParameter,
    SchemeSettings,
    SecurityScheme,
    classify_scheme,
)


class TestSecuritySchemeFromDict:
    """Tests for SecurityScheme.from_dict."""

    def test_full_scheme(self):
        scheme = SecurityScheme.from_dict(
            {
                "name": "oauth_1_0",
                "type": "OAuth 1.0",
                "describedBy": {
                    "headers": [{"name": "Authorization", "type": "string"}],
                    "queryParameters": [{"name": "oauth_token", "type": "token"}],
                },
                "settings": {"signatures": ["HMAC-SHA1", "PLAINTEXT"]},
            }
        )

        assert scheme.name == "oauth_1_0"
        assert scheme.type == "OAuth 1.0"
        assert scheme.headers == (SchemeParameter("Authorization", "string"),)
        assert scheme.query_parameters == (SchemeParameter("oauth_token", "token"),)
        assert scheme.settings == SchemeSettings(signatures=("HMAC-SHA1", "PLAINTEXT"))

    def test_none_is_unsecured(self):
        scheme = SecurityScheme.from_dict(None)

        assert scheme == SecurityScheme()
        assert scheme.kind is SchemeKind.NONE

    def test_missing_sections_default_to_empty(self):
        scheme = SecurityScheme.from_dict({"type": "Pass Through"})

        assert scheme.headers == ()
        assert scheme.query_parameters == ()
        assert scheme.settings.signatures == ()

    def test_mapping_form_of_described_by(self):
        """Raw description files declare headers as a name -> definition mapping."""
        scheme = SecurityScheme.from_dict(
            {
                "type": "x-custom",
                "describedBy": {
                    "headers": {
                        "X-API-Key": {"type": "string"},
                        "X-Client": None,
                        "X-Count": "integer",
                    }
                },
            }
        )

        assert scheme.headers == (
            SchemeParameter("X-API-Key", "string"),
            SchemeParameter("X-Client", "string"),
            SchemeParameter("X-Count", "integer"),
        )

    def test_shorthand_type_is_rendered_verbatim(self):
        scheme = SecurityScheme.from_dict(
            {"type": "x-custom", "describedBy": {"queryParameters": {"limit": "integer"}}}
        )

        assert scheme.query_parameters == (SchemeParameter("limit", "integer"),)

    def test_skips_malformed_list_entries(self, caplog):
        scheme = SecurityScheme.from_dict(
            {
                "type": "Pass Through",
                "describedBy": {"headers": ["X-Auth", {"name": "X-Token", "type": "token"}]},
            }
        )

        assert scheme.headers == (SchemeParameter("X-Token", "token"),)
        assert "Skipping malformed describedBy entry" in caplog.text

    def test_missing_parameter_type_defaults_to_string(self):
        parameter = SchemeParameter.from_dict({"name": "X-Key"})

        assert parameter.type == "string"

    def test_single_signature_string(self):
        scheme = SecurityScheme.from_dict({"type": "OAuth 1.0", "settings": {"signatures": "PLAINTEXT"}})

        assert scheme.settings.signatures == ("PLAINTEXT",)


class TestClassifyScheme:
    """Tests for classify_scheme."""

    @pytest.mark.parametrize(
        "scheme_type,expected",
        [
            ("OAuth 1.0", SchemeKind.OAUTH1),
            ("OAuth 2.0", SchemeKind.OAUTH2),
            ("Basic Authentication", SchemeKind.BASIC),
            ("Digest Authentication", SchemeKind.DIGEST),
            ("Pass Through", SchemeKind.PASS_THROUGH),
            ("x-custom", SchemeKind.CUSTOM),
            ("x-", SchemeKind.CUSTOM),
            ("Kerberos", SchemeKind.UNRECOGNIZED),
            ("oauth 2.0", SchemeKind.UNRECOGNIZED),
        ],
    )
    def test_by_type(self, scheme_type, expected):
        assert classify_scheme(SecurityScheme(name="scheme", type=scheme_type)) is expected

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("oauth1", SchemeKind.OAUTH1),
            ("oauth_1_0", SchemeKind.OAUTH1),
            ("oauth2", SchemeKind.OAUTH2),
            ("oauth_2_0", SchemeKind.OAUTH2),
        ],
    )
    def test_canonical_name_beats_type(self, name, expected):
        scheme = SecurityScheme(name=name, type="Basic Authentication")

        assert classify_scheme(scheme) is expected

    def test_canonical_name_without_type(self):
        assert classify_scheme(SecurityScheme(name="oauth_2_0")) is SchemeKind.OAUTH2

    def test_no_scheme(self):
        assert classify_scheme(None) is SchemeKind.NONE
        assert classify_scheme(SecurityScheme()) is SchemeKind.NONE
        assert classify_scheme(SecurityScheme(name="basic")) is SchemeKind.NONE

    def test_kind_property(self):
        assert SecurityScheme(type="Pass Through").kind is SchemeKind.PASS_THROUGH
