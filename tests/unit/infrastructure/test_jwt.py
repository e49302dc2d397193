"""Unit tests for token issuance and decoding."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from agrousers.domain.identity.exceptions import InvalidToken
from agrousers.infrastructure.auth.jwt import decode_token, issue_token

SECRET = "unit-test-secret-0123456789abcdef"
ISSUER = "agrousers"
AUDIENCE = "agrousers-clients"
CLAIMS = {"sub": "42", "email": "test@example.com"}


class TestIssueToken:
    def test_embeds_claims_issuer_audience_and_expiry(self):
        now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

        issued = issue_token(CLAIMS, SECRET, ISSUER, AUDIENCE, now=now)
        payload = jwt.get_unverified_claims(issued.token)

        assert payload["sub"] == "42"
        assert payload["email"] == "test@example.com"
        assert payload["iss"] == ISSUER
        assert payload["aud"] == AUDIENCE
        assert payload["iat"] == int(now.timestamp())
        assert payload["exp"] == int((now + timedelta(hours=1)).timestamp())
        assert issued.expires_at == now + timedelta(hours=1)

    def test_signed_with_hs256(self):
        issued = issue_token(CLAIMS, SECRET, ISSUER, AUDIENCE)

        assert jwt.get_unverified_header(issued.token)["alg"] == "HS256"

    def test_signs_with_requested_algorithm(self):
        issued = issue_token(CLAIMS, SECRET, ISSUER, AUDIENCE, algorithm="HS512")

        assert jwt.get_unverified_header(issued.token)["alg"] == "HS512"

    def test_deterministic_for_identical_inputs(self):
        now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

        first = issue_token(CLAIMS, SECRET, ISSUER, AUDIENCE, now=now)
        second = issue_token(CLAIMS, SECRET, ISSUER, AUDIENCE, now=now)

        assert first.token == second.token

    def test_does_not_mutate_claims(self):
        claims = dict(CLAIMS)

        issue_token(claims, SECRET, ISSUER, AUDIENCE)

        assert claims == CLAIMS


class TestDecodeToken:
    def test_round_trip(self):
        issued = issue_token(CLAIMS, SECRET, ISSUER, AUDIENCE)

        payload = decode_token(issued.token, SECRET, ISSUER, AUDIENCE)

        assert payload["sub"] == "42"
        assert payload["email"] == "test@example.com"

    @pytest.mark.parametrize(
        ("secret", "issuer", "audience"),
        [
            ("another-secret-0123456789abcdef", ISSUER, AUDIENCE),
            (SECRET, "someone-else", AUDIENCE),
            (SECRET, ISSUER, "other-audience"),
        ],
    )
    def test_rejects_mismatched_verification_inputs(self, secret, issuer, audience):
        issued = issue_token(CLAIMS, SECRET, ISSUER, AUDIENCE)

        with pytest.raises(InvalidToken):
            decode_token(issued.token, secret, issuer, audience)

    def test_round_trip_with_configured_algorithm(self):
        issued = issue_token(CLAIMS, SECRET, ISSUER, AUDIENCE, algorithm="HS384")

        payload = decode_token(issued.token, SECRET, ISSUER, AUDIENCE, algorithm="HS384")

        assert payload["sub"] == "42"

    def test_rejects_token_signed_with_other_algorithm(self):
        issued = issue_token(CLAIMS, SECRET, ISSUER, AUDIENCE, algorithm="HS512")

        with pytest.raises(InvalidToken):
            decode_token(issued.token, SECRET, ISSUER, AUDIENCE)

    def test_rejects_expired_token(self):
        issued = issue_token(
            CLAIMS, SECRET, ISSUER, AUDIENCE,
            now=datetime.now(timezone.utc) - timedelta(hours=2),
        )

        with pytest.raises(InvalidToken):
            decode_token(issued.token, SECRET, ISSUER, AUDIENCE)

    def test_rejects_garbage(self):
        with pytest.raises(InvalidToken):
            decode_token("not.a.token", SECRET, ISSUER, AUDIENCE)
