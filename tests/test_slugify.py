"""Tests for the UTF-8 walker and slug builder in orderdaily.utils.slugify."""

import pytest

from orderdaily.utils.slugify import SLUG_ENCODE_LENGTH, seems_utf8, slugify, utf8_uri_encode


# ---------------------------------------------------------------------------
# seems_utf8
# ---------------------------------------------------------------------------

class TestSeemsUtf8:
    def test_empty_is_valid(self) -> None:
        assert seems_utf8(b"") is True

    def test_ascii_is_valid(self) -> None:
        assert seems_utf8(b"plain ascii 123") is True

    @pytest.mark.parametrize("text", ["é", "€", "日本語", "😀"])
    def test_multibyte_characters_are_valid(self, text: str) -> None:
        assert seems_utf8(text.encode("utf-8")) is True

    def test_rejects_bad_continuation_byte(self) -> None:
        # 0x28 has high bits 00, not 10
        assert seems_utf8(b"\xc3\x28") is False

    def test_rejects_truncated_sequence(self) -> None:
        assert seems_utf8(b"abc\xe2\x82") is False

    def test_rejects_stray_continuation_byte(self) -> None:
        assert seems_utf8(b"\x80abc") is False

    def test_rejects_invalid_leading_byte(self) -> None:
        assert seems_utf8(b"\xff") is False

    def test_latin1_text_is_rejected(self) -> None:
        assert seems_utf8("café au lait".encode("latin-1")) is False

    def test_accepts_legacy_five_byte_form(self) -> None:
        assert seems_utf8(b"\xf8\x88\x80\x80\x80") is True


# ---------------------------------------------------------------------------
# utf8_uri_encode
# ---------------------------------------------------------------------------

class TestUtf8UriEncode:
    def test_ascii_passes_through(self) -> None:
        assert utf8_uri_encode(b"hello world") == "hello world"

    def test_two_byte_character(self) -> None:
        assert utf8_uri_encode("é".encode("utf-8")) == "%c3%a9"

    def test_three_byte_character(self) -> None:
        assert utf8_uri_encode("€".encode("utf-8")) == "%e2%82%ac"

    def test_four_byte_character(self) -> None:
        assert utf8_uri_encode("😀".encode("utf-8")) == "%f0%9f%98%80"

    def test_mixed_text(self) -> None:
        assert utf8_uri_encode("café".encode("utf-8")) == "caf%c3%a9"

    def test_zero_length_means_no_truncation(self) -> None:
        data = ("é" * 500).encode("utf-8")
        assert utf8_uri_encode(data, 0) == "%c3%a9" * 500

    def test_ascii_truncated_at_budget(self) -> None:
        assert utf8_uri_encode(b"abcdef", 3) == "abc"

    def test_multibyte_character_never_split(self) -> None:
        # "a" costs 1 unit, "é" would cost 6 more
        assert utf8_uri_encode("aé".encode("utf-8"), 3) == "a"

    def test_multibyte_character_fits_exactly(self) -> None:
        assert utf8_uri_encode("aé".encode("utf-8"), 7) == "a%c3%a9"

    def test_stops_at_first_character_over_budget(self) -> None:
        # nothing after the character that did not fit is emitted
        assert utf8_uri_encode("éab".encode("utf-8"), 5) == ""


# ---------------------------------------------------------------------------
# slugify
# ---------------------------------------------------------------------------

class TestSlugify:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Hello World!", "hello-world"),
            ("  multiple   spaces  ", "multiple-spaces"),
            ("<b>Bold</b> Title", "bold-title"),
            ("", ""),
            ("A.B.C", "a-b-c"),
        ],
    )
    def test_documented_examples(self, text: str, expected: str) -> None:
        assert slugify(text) == expected

    def test_only_disallowed_characters(self) -> None:
        assert slugify("!!!@@@###") == ""

    def test_hyphen_runs_collapse(self) -> None:
        assert slugify("Too---Many---Hyphens") == "too-many-hyphens"

    def test_leading_and_trailing_hyphens_trimmed(self) -> None:
        assert slugify("--Leading and Trailing--") == "leading-and-trailing"

    def test_underscore_is_kept(self) -> None:
        assert slugify("snake_case name") == "snake_case-name"

    def test_digits_are_kept(self) -> None:
        assert slugify("Model 3000 XL") == "model-3000-xl"

    def test_html_entities_removed(self) -> None:
        assert slugify("Fish &amp; Chips") == "fish-chips"

    def test_unclosed_tag_removed(self) -> None:
        assert slugify("Title <script") == "title"

    def test_stray_percent_removed(self) -> None:
        assert slugify("100% Cotton") == "100-cotton"

    def test_existing_percent_pair_keeps_hex_digits(self) -> None:
        assert slugify("Already%20Encoded") == "already20encoded"

    def test_sentinel_like_input_is_not_unmasked(self) -> None:
        assert slugify("a---41---b") == "a-41-b"

    def test_non_ascii_becomes_hex_of_utf8_bytes(self) -> None:
        assert slugify("Café") == "cafc3a9"

    def test_non_ascii_is_lowercased_before_encoding(self) -> None:
        assert slugify("ÉCOLE") == "c3a9cole"

    def test_accepts_bytes(self) -> None:
        assert slugify(b"Hello World") == "hello-world"

    def test_invalid_utf8_drops_non_ascii_bytes(self) -> None:
        assert slugify("Café au lait".encode("latin-1")) == "caf-au-lait"

    def test_lone_surrogate_does_not_raise(self) -> None:
        assert slugify("a\ud800b") == "aeda080b"

    def test_long_ascii_truncated_to_budget(self) -> None:
        assert slugify("a" * 250) == "a" * SLUG_ENCODE_LENGTH

    def test_long_non_ascii_truncated_on_character_boundary(self) -> None:
        # 33 characters use 198 units; the 34th would need 204
        assert slugify("é" * 100) == "c3a9" * 33

    @pytest.mark.parametrize(
        "text",
        ["Hello World!", "<i>Summer</i> Sale 2024", "Café Münchën", "x.y_z", "  --a--  "],
    )
    def test_idempotent(self, text: str) -> None:
        once = slugify(text)
        assert slugify(once) == once

    @pytest.mark.parametrize(
        "text",
        ["Hello, World!", "Red / Blue", "one  two\tthree\nfour", "Price: 9.99"],
    )
    def test_ascii_output_shape(self, text: str) -> None:
        slug = slugify(text)
        assert slug == slug.lower()
        assert "--" not in slug
        assert not slug.startswith("-") and not slug.endswith("-")
        assert set(slug) <= set("abcdefghijklmnopqrstuvwxyz0123456789_-")
