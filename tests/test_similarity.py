"""Tests for headline similarity."""

import pytest

from biasdesk.matching.similarity import normalize_headline, title_similarity


class TestNormalizeHeadline:
    def test_lowercases_and_strips_accents(self):
        assert normalize_headline("Política ESPAÑA Camión") == ["politica", "espana", "camion"]

    def test_drops_punctuation_and_short_words(self):
        assert normalize_headline("¡El PP y Vox, de acuerdo!") == ["vox", "acuerdo"]

    def test_keeps_numbers(self):
        assert normalize_headline("Presupuestos 2026") == ["presupuestos", "2026"]

    def test_empty_and_none(self):
        assert normalize_headline("") == []
        assert normalize_headline(None) == []


class TestTitleSimilarity:
    def test_identical_headlines(self):
        title = "El Gobierno aprueba la reforma laboral"
        assert title_similarity(title, title) == 1.0

    def test_disjoint_headlines(self):
        assert title_similarity("Gobierno aprueba reforma", "Tormenta inunda Valencia") == 0.0

    def test_no_qualifying_tokens(self):
        assert title_similarity("de la y", "Gobierno aprueba reforma") == 0.0
        assert title_similarity("", "") == 0.0

    def test_short_headline_contained_in_long_one(self):
        short = "Gobierno aprueba ley"
        long = "El Gobierno aprueba la nueva ley de vivienda este jueves"
        assert title_similarity(short, long) == 1.0

    def test_overlap_is_relative_to_shorter_headline(self):
        # {congreso, aprueba, los, presupuestos, 2026} vs {aprobados, los, presupuestos, congreso}
        a = "Congreso aprueba los presupuestos 2026"
        b = "Aprobados los presupuestos en el Congreso"
        assert title_similarity(a, b) == pytest.approx(3 / 4)

    def test_argument_order_does_not_matter(self):
        pairs = [
            ("Gobierno aprueba ley", "El Gobierno aprueba la nueva ley de vivienda este jueves"),
            ("Sánchez convoca elecciones", "Feijóo responde a la convocatoria de elecciones"),
            ("Congreso aprueba los presupuestos 2026", "El Congreso aprueba los presupuestos generales"),
        ]
        for a, b in pairs:
            assert title_similarity(a, b) == title_similarity(b, a)

    def test_accents_do_not_affect_matching(self):
        assert title_similarity("Sánchez comparecerá", "Sanchez comparecera") == 1.0

    def test_repeated_calls_are_stable(self):
        a = "Sánchez convoca elecciones anticipadas"
        b = "Elecciones anticipadas: Sánchez mueve ficha"
        assert title_similarity(a, b) == title_similarity(a, b)

    def test_bounds(self):
        headlines = [
            "Gobierno aprueba ley",
            "Gobierno Gobierno Gobierno",
            "La tormenta deja lluvias en el norte",
            "ley",
            "",
        ]
        for a in headlines:
            for b in headlines:
                assert 0.0 <= title_similarity(a, b) <= 1.0

    def test_custom_minimum_token_length(self):
        assert title_similarity("PP y PSOE", "PP", min_length=2) == 1.0
        assert title_similarity("PP y PSOE", "PP") == 0.0
