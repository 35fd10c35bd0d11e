"""Tests for SKU / PO number sequences."""

from stockroom.core.services.sequencer import next_id, parse_sequence_number


class TestParseSequenceNumber:
    def test_parses_matching_prefix(self):
        assert parse_sequence_number("PRD", "PRD-0042") == 42

    def test_other_prefix_is_ignored(self):
        assert parse_sequence_number("PRD", "RAW-0042") is None

    def test_free_form_identifier_is_ignored(self):
        assert parse_sequence_number("PRD", "custom-sku") is None
        assert parse_sequence_number("PRD", "PRD-12a") is None

    def test_prefix_is_not_a_regex(self):
        assert parse_sequence_number("P.O", "PXO-0001") is None
        assert parse_sequence_number("P.O", "P.O-0001") == 1


class TestNextId:
    """Tests for next_id()."""

    def test_first_id(self):
        assert next_id("PRD", []) == "PRD-0001"

    def test_gaps_are_not_reused(self):
        assert next_id("PRD", ["PRD-0001", "PRD-0003"]) == "PRD-0004"

    def test_unordered_input(self):
        assert next_id("RAW", ["RAW-0007", "RAW-0002", "RAW-0005"]) == "RAW-0008"

    def test_foreign_identifiers_are_skipped(self):
        assert next_id("PO", ["PO-0002", "legacy-99", "PRD-0050"]) == "PO-0003"

    def test_width_overflow_keeps_digits(self):
        assert next_id("PO", ["PO-9999"]) == "PO-10000"

    def test_custom_width(self):
        assert next_id("PO", ["PO-01"], width=2) == "PO-02"
