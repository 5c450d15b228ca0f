"""Unit tests for email and phone masking helpers."""

import pytest

from authcore.core.masking import mask_email, mask_phone


@pytest.mark.unit
class TestMaskEmail:
    def test_masks_local_part(self):
        assert mask_email("alice@example.com") == "al***@example.com"

    def test_short_local_part(self):
        assert mask_email("a@example.com") == "a***@example.com"

    def test_without_at_sign(self):
        assert mask_email("alice") == "al***"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values_pass_through(self, value):
        assert mask_email(value) == value


@pytest.mark.unit
class TestMaskPhone:
    def test_keeps_last_four_digits(self):
        assert mask_phone("+1 (555) 123-4567") == "***-***-4567"

    def test_custom_visible_digits(self):
        assert mask_phone("+15551234567", visible_digits=2) == "***-***-67"

    def test_none_passes_through(self):
        assert mask_phone(None) is None
