"""Tests for the Credential value object."""

import pytest

from docassist_session.core.exceptions import InvalidCredential
from docassist_session.core.value_objects import Credential


class TestCredential:
    """Test Credential normalization and masking."""

    def test_from_raw_strips_bearer_prefix(self):
        assert Credential.from_raw("Bearer abc.def.ghi").value == "abc.def.ghi"

    def test_from_raw_prefix_is_case_insensitive(self):
        assert Credential.from_raw("bearer   T1").value == "T1"

    def test_from_raw_strips_surrounding_whitespace(self):
        assert Credential.from_raw("  T1\n").value == "T1"

    def test_from_raw_passes_credential_through(self):
        credential = Credential("T1")
        assert Credential.from_raw(credential) is credential

    @pytest.mark.parametrize("raw", [None, "", "   ", "Bearer ", 42])
    def test_from_raw_rejects_empty_or_undefined(self, raw):
        with pytest.raises(InvalidCredential):
            Credential.from_raw(raw)

    def test_rejects_embedded_whitespace(self):
        with pytest.raises(InvalidCredential):
            Credential("abc def")

    def test_authorization_header_adds_prefix(self):
        assert Credential.from_raw("Bearer T1").authorization_header == "Bearer T1"

    def test_short_value_fully_masked(self):
        assert Credential("short-token").mask_for_logging() == "***"

    def test_long_value_partially_masked(self):
        credential = Credential("abcdefgh" + "x" * 20 + "12345678")
        assert credential.mask_for_logging() == "abcdefgh...12345678"

    def test_repr_does_not_leak_value(self):
        credential = Credential("super-secret-value")
        assert "super-secret-value" not in repr(credential)
        assert "super-secret-value" not in str(credential)
