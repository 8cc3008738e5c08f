"""Tests for identifier allocation."""

import pytest

from unievents import ids


class TestNextNumber:
    """Next number is one past the highest trailing digit run."""

    @pytest.mark.parametrize(
        "identifiers,expected",
        [
            ([], 1),
            (["EVT-0001"], 2),
            (["EVT-0003", "EVT-0001", "EVT-0002"], 4),
            (["EVT-0009", "EVT-0042"], 43),
            (["PAR-00007"], 8),
        ],
    )
    def test_next_number(self, identifiers, expected):
        assert ids.next_number(identifiers) == expected

    def test_gaps_are_not_reused(self):
        # only the maximum matters, holes left by deletes stay empty
        assert ids.next_event_number(["EVT-0001", "EVT-0005"]) == 6

    def test_identifiers_without_digits_count_as_zero(self):
        assert ids.next_number(["EVT-", "custom"]) == 1
        assert ids.trailing_number(None) == 0
        assert ids.trailing_number("") == 0


class TestFormatting:
    def test_event_id_is_zero_padded(self):
        assert ids.format_event_id(1) == "EVT-0001"
        assert ids.format_event_id(42) == "EVT-0042"
        assert ids.format_event_id(12345) == "EVT-12345"

    def test_event_id_never_below_one(self):
        assert ids.format_event_id(0) == "EVT-0001"

    def test_participant_id_is_zero_padded(self):
        assert ids.format_participant_id(1) == "PAR-00001"
        assert ids.format_participant_id(123) == "PAR-00123"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("EVT-0001", True),
            ("EVT-9999", True),
            ("EVT-001", False),
            ("EVT-00001", False),
            ("evt-0001", False),
            ("EVT-00A1", False),
            ("", False),
            (None, False),
        ],
    )
    def test_event_id_pattern(self, value, expected):
        assert ids.is_valid_event_id(value) is expected
