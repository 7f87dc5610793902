"""Unit tests for text normalization and boundary-aware matching."""
import pytest

from reclassifier.services.classification.text import (
    NormalizedText,
    keyword_weight,
    normalize_enum_value,
    normalize_keywords,
    normalize_text,
    score_text,
    to_slug,
)


class TestNormalizeText:
    """Test normalize_text."""

    def test_accents_case_and_punctuation(self):
        assert normalize_text("Blusa Manga-Larga (Lino)") == "blusa manga larga lino"
        assert normalize_text("Pantalón  CAFÉ") == "pantalon cafe"

    def test_html_tags_are_removed(self):
        assert normalize_text("<p>Vestido<br/>midi</p>") == "vestido midi"

    def test_angle_brackets_in_plain_text_are_kept(self):
        text = "Falda midi talla <10 años, con bolsillos> para niña"
        assert normalize_text(text) == "falda midi talla 10 anos con bolsillos para nina"

    def test_none_and_non_strings(self):
        assert normalize_text(None) == ""
        assert normalize_text(42) == "42"

    def test_only_punctuation_is_empty(self):
        assert normalize_text(" -- // ") == ""


class TestNormalizedText:
    """Test keyword matching on normalized text."""

    def test_single_word_matches_whole_token_only(self):
        text = NormalizedText.of("Topo de plata")

        assert text.contains("topo")
        assert not text.contains("top")

    def test_phrase_matches_contiguous_tokens(self):
        text = NormalizedText.of("Blusa manga larga")

        assert text.contains("manga larga")
        assert not text.contains("larga manga")
        assert not text.contains("blusa larga")

    def test_phrase_does_not_match_inside_longer_token(self):
        text = NormalizedText.of("camisetas rojas")

        assert not text.contains("camiseta roja")

    def test_of_joins_parts_and_skips_empty(self):
        text = NormalizedText.of("Vestido", None, "", "Midi")

        assert text.text == "vestido midi"
        assert text.tokens == ("vestido", "midi")

    def test_empty_text_is_falsy(self):
        assert not NormalizedText.of(None)
        assert NormalizedText.of("x")

    def test_matched_is_sorted(self):
        text = NormalizedText.of("jean azul denim")

        assert text.matched(["jean", "denim", "lino"]) == ["denim", "jean"]


class TestScoring:
    """Test +1 word / +2 phrase scoring."""

    def test_keyword_weight(self):
        assert keyword_weight("lino") == 1
        assert keyword_weight("manga larga") == 2

    def test_score_counts_each_keyword_once(self):
        text = NormalizedText.of("lino lino manga larga")

        score, matched = score_text(text, ["lino", "manga larga", "seda"])

        assert score == 3
        assert matched == ["lino", "manga larga"]

    def test_no_match_scores_zero(self):
        score, matched = score_text(NormalizedText.of("gorra"), ["lino"])

        assert score == 0
        assert matched == []


class TestKeywordHelpers:
    """Test keyword normalization helpers."""

    def test_normalize_keywords_dedupes_in_order(self):
        assert normalize_keywords(["Half-Zip", "half zip", "Lino", ""]) == ("half zip", "lino")

    def test_to_slug(self):
        assert to_slug("Camisas y Blusas") == "camisas_y_blusas"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("camisas_y_blusas", "camisas_y_blusas"),
            ("Camisas y Blusas", "camisas_y_blusas"),
            ("camisas", None),
            (None, None),
            ("", None),
        ],
    )
    def test_normalize_enum_value(self, value, expected):
        allowed = ["camisas_y_blusas", "vestidos"]

        assert normalize_enum_value(value, allowed) == expected
