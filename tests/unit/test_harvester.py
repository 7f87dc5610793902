"""Unit tests for SignalHarvester.

Covers:
- Evidence source collection (description fallback, URL path, vendor signals)
- Category inference, per-source voting and signal strength
- Subcategory inference and name backing
- Gender cues and category priors
"""
import pytest

from reclassifier.services.classification.harvester import (
    NO_RUNNER_UP_MARGIN,
    Signal,
    SignalHarvester,
    SignalStrength,
)


@pytest.fixture
def harvester(base_index):
    return SignalHarvester(base_index)


class TestCollectSources:
    """Test evidence source collection."""

    def test_only_non_empty_sources(self, harvester, make_snapshot):
        product = make_snapshot(name="Vestido midi", seo_title="  ")

        sources = harvester.collect_sources(product)

        assert list(sources) == ["name"]
        assert sources["name"].text == "vestido midi"

    def test_original_description_preferred(self, harvester, make_snapshot):
        product = make_snapshot(
            name="Prenda",
            description="Texto enriquecido",
            metadata={"enrichment": {"original_description": "Blusa de lino"}},
        )

        sources = harvester.collect_sources(product)

        assert sources["description"].text == "blusa de lino"

    def test_url_uses_path_only(self, harvester, make_snapshot):
        product = make_snapshot(
            name="Prenda",
            source_url="https://tienda.example.com/collections/blusas/blusa-lino?color=azul",
        )

        sources = harvester.collect_sources(product)

        assert sources["url"].text == "collections blusas blusa lino"

    def test_vendor_signals_from_enrichment(self, harvester, make_snapshot):
        product = make_snapshot(
            name="Prenda",
            metadata={
                "product_type": "Ignorado",
                "enrichment": {
                    "original_vendor_signals": {"product_type": "Vestidos", "tags": ["Verano"]},
                },
            },
        )

        sources = harvester.collect_sources(product)

        assert sources["vendor"].text == "vestidos verano"

    def test_vendor_signals_top_level(self, harvester, make_snapshot):
        product = make_snapshot(name="Prenda", metadata={"category": "Calzado", "tags": "botas, cuero"})

        sources = harvester.collect_sources(product)

        assert sources["vendor"].text == "calzado botas cuero"


class TestCategoryInference:
    """Test category inference and strength."""

    def test_no_evidence_yields_empty_signal(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name=""))

        assert signal == Signal()
        assert not signal.has_opinion
        assert signal.signal_strength == SignalStrength.WEAK

    def test_unknown_vocabulary_has_no_opinion(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Articulo sin descripcion util"))

        assert signal.inferred_category is None
        assert signal.category_margin == 0.0
        assert signal.source_count == 1

    def test_strong_single_source_with_clear_margin(self, harvester, make_snapshot):
        product = make_snapshot(name="Blusa manga larga de lino", category="camisetas_y_tops")

        signal = harvester.harvest(product)

        assert signal.inferred_category == "camisas_y_blusas"
        assert signal.category_support == 4
        assert signal.category_margin >= 1.5
        assert signal.agreeing_sources == ("name",)
        assert signal.conflicting_categories == ()
        assert signal.signal_strength == SignalStrength.STRONG

    def test_two_agreeing_sources_are_strong(self, harvester, make_snapshot):
        product = make_snapshot(
            name="Vestido midi",
            metadata={"enrichment": {"original_vendor_signals": {"product_type": "Vestidos"}}},
        )

        signal = harvester.harvest(product)

        assert signal.inferred_category == "vestidos"
        assert set(signal.agreeing_sources) == {"name", "vendor"}
        assert signal.signal_strength == SignalStrength.STRONG

    def test_conflicting_source_is_not_strong(self, harvester, make_snapshot):
        product = make_snapshot(name="Vestido", seo_title="Falda plisada")

        signal = harvester.harvest(product)

        assert signal.inferred_category == "faldas"
        assert signal.agreeing_sources == ("seo_title",)
        assert signal.conflicting_categories == ("vestidos",)
        assert signal.signal_strength == SignalStrength.MODERATE

    def test_generic_single_keyword_is_weak(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Camiseta"))

        assert signal.inferred_category == "camisetas_y_tops"
        assert signal.signal_strength == SignalStrength.WEAK

    def test_trouser_bota_is_not_footwear(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Pantalón bota ancha"))

        assert signal.inferred_category != "calzado"
        assert "bota" not in signal.category_keywords


class TestSubcategoryInference:
    """Test subcategory inference."""

    def test_name_backed_subcategory(self, harvester, make_snapshot):
        product = make_snapshot(name="Blusa manga larga de lino", category="camisetas_y_tops")

        signal = harvester.harvest(product)

        assert signal.inferred_subcategory == "camisa_de_lino"
        assert signal.subcategory_name_backed
        assert signal.name_subcategory == "camisa_de_lino"
        assert signal.subcategory_margin == NO_RUNNER_UP_MARGIN

    def test_description_only_subcategory_is_not_name_backed(self, harvester, make_snapshot):
        product = make_snapshot(
            name="Camisa",
            category="camisas_y_blusas",
            description="Camisa de lino fresca",
        )

        signal = harvester.harvest(product)

        assert signal.inferred_subcategory == "camisa_de_lino"
        assert signal.description_subcategory == "camisa_de_lino"
        assert signal.name_subcategory != "camisa_de_lino"
        assert not signal.subcategory_name_backed

    def test_subcategory_ranked_within_inferred_category(self, harvester, make_snapshot):
        product = make_snapshot(name="Pantalón de lino", category="camisas_y_blusas")

        signal = harvester.harvest(product)

        assert signal.inferred_category == "pantalones_no_denim"
        assert signal.inferred_subcategory == "pantalon_de_lino"


class TestGenderInference:
    """Test gender cues and priors."""

    def test_female_cue_with_category_prior(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Vestido midi para mujer"))

        assert signal.inferred_gender == "femenino"
        assert signal.gender_support == 1
        assert signal.gender_confidence == pytest.approx(0.82)
        assert "kw:gender_female" in signal.gender_reasons
        assert "src:name" in signal.gender_reasons
        assert "cat:gender_feminine_prior" in signal.gender_reasons

    def test_single_source_male_cue(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Camiseta básica hombre"))

        assert signal.inferred_gender == "masculino"
        assert signal.gender_support == 1
        assert signal.gender_confidence == pytest.approx(0.82)

    def test_two_sources_raise_confidence(self, harvester, make_snapshot):
        product = make_snapshot(name="Camiseta básica hombre", seo_tags=["Hombre"])

        signal = harvester.harvest(product)

        assert signal.inferred_gender == "masculino"
        assert signal.gender_support == 2
        assert signal.gender_confidence == pytest.approx(0.96)
        assert "src:seo_tags" in signal.gender_reasons

    def test_mixed_binary_cues_mean_unisex(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Camiseta hombre mujer"))

        assert signal.inferred_gender == "no_binario_unisex"
        assert "kw:gender_mixed_binary" in signal.gender_reasons
        assert "rule:gender_dual_binary_overlap" in signal.gender_reasons

    def test_explicit_unisex(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Gorra unisex"))

        assert signal.inferred_gender == "no_binario_unisex"
        assert "kw:gender_unisex" in signal.gender_reasons

    def test_neutral_category_prior_without_cues(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Gorra"))

        assert signal.inferred_gender == "no_binario_unisex"
        assert signal.gender_support == 0
        assert signal.gender_reasons == ("cat:gender_neutral",)

    def test_child_cue(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Camiseta infantil kids"))

        assert signal.inferred_gender == "infantil"
        assert "kw:gender_child_strict" in signal.gender_reasons

    def test_adult_baby_doll_is_not_child(self, harvester, make_snapshot):
        signal = harvester.harvest(make_snapshot(name="Pijama baby doll"))

        assert signal.inferred_gender != "infantil"

    def test_confidence_is_clamped(self, harvester, make_snapshot):
        product = make_snapshot(
            name="Vestido para mujer",
            seo_title="Vestido mujer",
            seo_tags=["Mujer"],
            description="Vestido de mujer",
        )

        signal = harvester.harvest(product)

        assert signal.inferred_gender == "femenino"
        assert 0.45 <= signal.gender_confidence <= 0.97
