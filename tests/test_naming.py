"""Tests for the filename codec."""

from __future__ import annotations

import pytest

from ctxstash.config import StashConfig
from ctxstash.naming import (
    decode_ref,
    encode_filename,
    filename_for_ref,
    is_entry_filename,
    ref_index,
)

DEFAULT = StashConfig()


class TestEncode:
    def test_default_padding(self):
        assert encode_filename(1, DEFAULT) == "00001.md"
        assert encode_filename(0, DEFAULT) == "00000.md"

    def test_padding_is_minimum_not_truncation(self):
        assert encode_filename(1234567, DEFAULT) == "1234567.md"

    def test_no_padding(self):
        cfg = StashConfig(leading_zeros=0)
        assert encode_filename(7, cfg) == "7.md"

    def test_prefix_and_suffix(self):
        cfg = StashConfig(file_prefix="ctx-", file_suffix=".txt", leading_zeros=3)
        assert encode_filename(42, cfg) == "ctx-042.txt"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            encode_filename(-1, DEFAULT)

    def test_filename_for_ref_is_literal(self):
        assert filename_for_ref("../x", DEFAULT) == "../x.md"


class TestDecode:
    def test_default(self):
        assert decode_ref("00012.md", DEFAULT) == "00012"

    def test_config_file_is_not_an_entry(self):
        assert decode_ref("config.json", DEFAULT) is None
        assert not is_entry_filename("config.json", DEFAULT)

    def test_config_file_excluded_even_when_it_decodes(self):
        cfg = StashConfig(file_suffix=".json")
        assert decode_ref("config.json", cfg) == "config"
        assert not is_entry_filename("config.json", cfg)

    def test_suffix_is_case_sensitive(self):
        assert decode_ref("00001.MD", DEFAULT) is None

    def test_prefix_must_match(self):
        cfg = StashConfig(file_prefix="ctx-")
        assert decode_ref("ctx-00001.md", cfg) == "00001"
        assert decode_ref("00001.md", cfg) is None
        assert decode_ref("CTX-00001.md", cfg) is None

    def test_empty_ref_is_no_match(self):
        assert decode_ref(".md", DEFAULT) is None

    def test_overlapping_prefix_suffix_is_no_match(self):
        cfg = StashConfig(file_prefix="ab", file_suffix="bc")
        assert decode_ref("abc", cfg) is None
        assert decode_ref("abxbc", cfg) == "x"

    def test_non_numeric_ref_decodes_verbatim(self):
        assert decode_ref("notes.md", DEFAULT) == "notes"

    @pytest.mark.parametrize("index", [0, 1, 99999, 100000, 31337])
    @pytest.mark.parametrize(
        "cfg",
        [DEFAULT, StashConfig(leading_zeros=0), StashConfig(file_prefix="n_", file_suffix="", leading_zeros=2)],
    )
    def test_round_trip_is_string_level(self, index: int, cfg: StashConfig):
        assert decode_ref(encode_filename(index, cfg), cfg) == str(index).zfill(cfg.leading_zeros)


class TestRefIndex:
    def test_numeric(self):
        assert ref_index("00012") == 12
        assert ref_index("0") == 0

    @pytest.mark.parametrize("ref", ["", "12a", " 12", "+1", "-1", "1_0", "１２", "notes"])
    def test_rejects_non_decimal(self, ref: str):
        assert ref_index(ref) is None
