"""Tests for VAPID claim validation."""

import time

import pytest

from vapid_push.core.claims import DEFAULT_EXPIRY_SECONDS, MAX_EXPIRY_SECONDS, validate_claim
from vapid_push.exceptions import InvalidClaim
from vapid_push.models import Claim, ValidatedClaim

NOW = 1_700_000_000
MAIL = "mailto:georg@test.com"
ENDPOINT = "https://updates.push.services.mozilla.com/wpush/v2/gAAAAABa6CXAoHisP"


class TestSub:
    def test_missing_sub_raises(self) -> None:
        with pytest.raises(InvalidClaim) as exc_info:
            validate_claim({}, ENDPOINT, now=NOW)
        assert exc_info.value.field == "sub"

    def test_none_claim_raises(self) -> None:
        with pytest.raises(InvalidClaim):
            validate_claim(None, ENDPOINT, now=NOW)

    @pytest.mark.parametrize("sub", ["maito:testtest", "georg@test.com", "https://example.com", ""])
    def test_non_mailto_sub_raises(self, sub: str) -> None:
        with pytest.raises(InvalidClaim) as exc_info:
            validate_claim({"sub": sub}, ENDPOINT, now=NOW)
        assert exc_info.value.field == "sub"

    def test_non_string_sub_raises(self) -> None:
        with pytest.raises(InvalidClaim):
            validate_claim({"sub": 42}, ENDPOINT, now=NOW)

    def test_mailto_sub_kept(self) -> None:
        assert validate_claim({"sub": MAIL}, ENDPOINT, now=NOW).sub == MAIL


class TestAud:
    def test_aud_derived_from_endpoint(self) -> None:
        claim = validate_claim({"sub": "mailto:x@y.com"}, "https://push.example.com/abc", now=NOW)
        assert claim.aud == "https://push.example.com/"

    def test_aud_derived_keeps_explicit_port(self) -> None:
        claim = validate_claim({"sub": MAIL}, "https://push.example.com:8443/abc", now=NOW)
        assert claim.aud == "https://push.example.com:8443/"

    def test_aud_derived_for_ipv6_host(self) -> None:
        claim = validate_claim({"sub": MAIL}, "https://[::1]:8443/abc", now=NOW)
        assert claim.aud == "https://[::1]:8443/"

    def test_matching_aud_kept_as_given(self) -> None:
        aud = "https://updates.push.services.mozilla.com/"
        claim = validate_claim({"sub": MAIL, "aud": aud}, ENDPOINT, now=NOW)
        assert claim.aud == aud

    def test_matching_aud_without_trailing_slash(self) -> None:
        aud = "https://updates.push.services.mozilla.com"
        assert validate_claim({"sub": MAIL, "aud": aud}, ENDPOINT, now=NOW).aud == aud

    @pytest.mark.parametrize(
        "aud",
        [
            "abc",
            "http://updates.push.services.mozilla.com/",
            "https://fcm.googleapis.com/",
            "https://updates.push.services.mozilla.com:443/",
            "https://updates.push.services.mozilla.com:8443/",
        ],
    )
    def test_mismatching_aud_raises(self, aud: str) -> None:
        with pytest.raises(InvalidClaim) as exc_info:
            validate_claim({"sub": MAIL, "aud": aud}, ENDPOINT, now=NOW)
        assert exc_info.value.field == "aud"

    def test_port_mismatch_with_explicit_endpoint_port(self) -> None:
        with pytest.raises(InvalidClaim):
            validate_claim({"sub": MAIL, "aud": "https://push.example.com/"}, "https://push.example.com:8443/x", now=NOW)

    def test_same_explicit_port_matches(self) -> None:
        claim = validate_claim(
            {"sub": MAIL, "aud": "https://push.example.com:8443"},
            "https://push.example.com:8443/x",
            now=NOW,
        )
        assert claim.aud == "https://push.example.com:8443"

    def test_invalid_aud_port_raises(self) -> None:
        with pytest.raises(InvalidClaim):
            validate_claim({"sub": MAIL, "aud": "https://push.example.com:99999/"}, ENDPOINT, now=NOW)


class TestExp:
    def test_missing_exp_defaults(self) -> None:
        claim = validate_claim({"sub": MAIL}, ENDPOINT, now=NOW)
        assert claim.exp == NOW + DEFAULT_EXPIRY_SECONDS

    def test_default_is_below_max(self) -> None:
        assert DEFAULT_EXPIRY_SECONDS == 59 * 60 * 24
        assert MAX_EXPIRY_SECONDS == 60 * 60 * 24
        assert DEFAULT_EXPIRY_SECONDS < MAX_EXPIRY_SECONDS

    def test_past_exp_replaced(self) -> None:
        claim = validate_claim({"sub": MAIL, "exp": 12345}, ENDPOINT, now=NOW)
        assert NOW < claim.exp < NOW + MAX_EXPIRY_SECONDS

    def test_exp_equal_to_now_replaced(self) -> None:
        claim = validate_claim({"sub": MAIL, "exp": NOW}, ENDPOINT, now=NOW)
        assert claim.exp == NOW + DEFAULT_EXPIRY_SECONDS

    def test_exp_beyond_24h_replaced(self) -> None:
        claim = validate_claim({"sub": MAIL, "exp": NOW + 60 * 60 * 27}, ENDPOINT, now=NOW)
        assert claim.exp == NOW + DEFAULT_EXPIRY_SECONDS

    def test_exp_at_24h_bound_kept(self) -> None:
        claim = validate_claim({"sub": MAIL, "exp": NOW + MAX_EXPIRY_SECONDS}, ENDPOINT, now=NOW)
        assert claim.exp == NOW + MAX_EXPIRY_SECONDS

    def test_valid_exp_kept(self) -> None:
        claim = validate_claim({"sub": MAIL, "exp": NOW + 60 * 120}, ENDPOINT, now=NOW)
        assert claim.exp == NOW + 60 * 120

    def test_integer_string_exp_accepted(self) -> None:
        claim = validate_claim({"sub": MAIL, "exp": str(NOW + 60)}, ENDPOINT, now=NOW)
        assert claim.exp == NOW + 60
        assert isinstance(claim.exp, int)

    @pytest.mark.parametrize("exp", ["soon", 1.5e9, True, [], "1700000060.5"])
    def test_non_integer_exp_replaced(self, exp: object) -> None:
        claim = validate_claim({"sub": MAIL, "exp": exp}, ENDPOINT, now=NOW)
        assert claim.exp == NOW + DEFAULT_EXPIRY_SECONDS

    def test_uses_wall_clock_by_default(self) -> None:
        before = int(time.time())
        claim = validate_claim({"sub": MAIL}, ENDPOINT)
        after = int(time.time())
        assert before < claim.exp
        assert claim.exp < after + 60 * 61 * 24


class TestResult:
    def test_accepts_claim_object(self) -> None:
        claim = validate_claim(Claim(sub=MAIL), ENDPOINT, now=NOW)
        assert isinstance(claim, ValidatedClaim)

    def test_dict_order_is_sub_aud_exp(self) -> None:
        claim = validate_claim({"exp": NOW + 60, "sub": MAIL}, ENDPOINT, now=NOW)
        assert list(claim.to_dict()) == ["sub", "aud", "exp"]

    def test_input_mapping_not_mutated(self) -> None:
        raw = {"sub": MAIL}
        validate_claim(raw, ENDPOINT, now=NOW)
        assert raw == {"sub": MAIL}
