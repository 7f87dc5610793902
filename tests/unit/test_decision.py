"""Unit tests for DecisionEngine.

Covers:
- End-to-end decisions for representative products
- Evidence gates and move thresholds per field
- Cross-field consistency (blocked mismatches, subcategory reset)
- Gender risk thresholds
- Draft/row shapes
"""
from uuid import uuid4

import pytest

from reclassifier.models.taxonomy import Taxonomy
from reclassifier.services.classification.decision import (
    DecisionEngine,
    DecisionPolicy,
    FieldChange,
    MAX_REASONS,
    ProposalDraft,
    ScoringResult,
)
from reclassifier.services.classification.evidence_index import TaxonomyIndex
from reclassifier.services.classification.harvester import Signal, SignalHarvester, SignalStrength
from reclassifier.services.classification.text import NormalizedText


@pytest.fixture
def engine(base_index):
    return DecisionEngine(base_index)


@pytest.fixture
def harvester(base_index):
    return SignalHarvester(base_index)


def decide(harvester, engine, product):
    return engine.decide(product, harvester.harvest(product))


def make_signal(evidence: str, **fields) -> Signal:
    fields.setdefault("signal_strength", SignalStrength.STRONG)
    return Signal(evidence=NormalizedText.of(evidence), source_count=1, **fields)


class TestEndToEnd:
    """Test decisions for harvested products."""

    def test_category_and_subcategory_move(self, harvester, engine, make_snapshot):
        product = make_snapshot(
            name="Blusa manga larga de lino",
            category="camisetas_y_tops",
            image_cover_url="https://cdn.example.com/blusa.jpg",
        )

        draft = decide(harvester, engine, product)

        assert draft is not None
        assert draft.product_id == product.id
        assert draft.from_category == "camisetas_y_tops"
        assert draft.from_subcategory is None
        assert draft.to_category == "camisas_y_blusas"
        assert draft.to_subcategory == "camisa_de_lino"
        assert draft.to_gender is None
        assert draft.changed_fields == ["category", "subcategory"]
        assert draft.field_scores["category"]["confidence"] == pytest.approx(0.90)
        assert draft.field_scores["subcategory"]["confidence"] == pytest.approx(0.86)
        assert draft.confidence == pytest.approx(0.90)
        assert draft.score_support == 4
        assert draft.reasons[0] == "signal:strong"
        assert "kw:category:blusa" in draft.reasons
        assert "kw:subcategory:lino" in draft.reasons
        assert draft.image_cover_url == "https://cdn.example.com/blusa.jpg"

    def test_moderate_subcategory_overwrite_below_threshold(self, harvester, engine, make_snapshot):
        """0.80 - 0.04 does not clear the 0.78 overwrite threshold."""
        product = make_snapshot(
            name="Pantalón palazzo",
            category="pantalones_no_denim",
            subcategory="pantalon_chino",
        )

        signal = harvester.harvest(product)

        assert signal.signal_strength == SignalStrength.MODERATE
        assert signal.inferred_subcategory == "palazzo"
        assert engine.decide(product, signal) is None

    def test_tie_winner_without_required_evidence_is_blocked(self, make_snapshot):
        index = TaxonomyIndex.build(Taxonomy.from_mapping({
            "pantalones_no_denim": ["pantalon_de_dril", "pantalon_chino", "pantalon_cargo"],
        }))
        product = make_snapshot(
            name="Pantalón palazzo",
            category="pantalones_no_denim",
            subcategory="pantalon_chino",
        )

        signal = SignalHarvester(index).harvest(product)

        assert signal.inferred_subcategory == "pantalon_de_dril"
        assert DecisionEngine(index).decide(product, signal) is None

    def test_single_source_cannot_leave_unisex(self, harvester, engine, make_snapshot):
        product = make_snapshot(
            name="Camiseta básica hombre",
            category="camisetas_y_tops",
            gender="no_binario_unisex",
        )

        assert decide(harvester, engine, product) is None

    def test_two_sources_leave_unisex(self, harvester, engine, make_snapshot):
        product = make_snapshot(
            name="Camiseta básica hombre",
            category="camisetas_y_tops",
            gender="no_binario_unisex",
            seo_tags=["Hombre"],
        )

        draft = decide(harvester, engine, product)

        assert draft is not None
        assert draft.changed_fields == ["gender"]
        assert draft.from_gender == "no_binario_unisex"
        assert draft.to_gender == "masculino"
        assert draft.to_category == "camisetas_y_tops"
        assert draft.confidence == pytest.approx(0.96)
        assert draft.score_support == 2
        assert draft.seo_category_hints == ["Hombre"]

    def test_no_evidence_no_proposal(self, harvester, engine, make_snapshot):
        assert decide(harvester, engine, make_snapshot(name="")) is None

    @pytest.mark.parametrize("name", [
        "Blusa manga larga de lino",
        "Pantalón de lino",
        "Vestido midi para mujer",
        "Camisa con collar",
        "Collar de plata",
        "Medias tobilleras",
        "Pantalón bota ancha",
        "Gorra unisex",
        "Camiseta infantil kids",
        "Botas con tacón",
    ])
    @pytest.mark.parametrize("category,subcategory", [
        (None, None),
        ("camisas_y_blusas", "camisa_de_lino"),
        ("calzado", None),
    ])
    def test_draft_invariants(self, harvester, engine, make_snapshot, name, category, subcategory):
        """Any draft is internally consistent."""
        product = make_snapshot(name=name, category=category, subcategory=subcategory)

        draft = decide(harvester, engine, product)

        if draft is None:
            return
        assert draft.changed_fields
        if draft.to_subcategory is not None:
            assert engine.index.is_valid_subcategory(draft.to_category, draft.to_subcategory)
        assert 0.0 <= draft.confidence <= 1.0
        assert len(draft.reasons) <= MAX_REASONS
        assert len(draft.reasons) == len(set(draft.reasons))


class TestEvidenceGate:
    """Test required-evidence gates."""

    def test_empty_required_list_never_passes(self):
        assert not DecisionEngine.passes_gate((), make_signal("camisa"))

    def test_gate_checks_evidence_text(self):
        assert DecisionEngine.passes_gate(("lino",), make_signal("camisa de lino"))
        assert not DecisionEngine.passes_gate(("lino",), make_signal("camisa de algodon"))

    def test_strong_signal_without_evidence_never_moves(self, base_index, engine, make_snapshot):
        """No category accepts a move on text that names nothing."""
        product = make_snapshot(name="Articulo sin descripcion util")
        for category in base_index.category_keys():
            signal = make_signal(
                "articulo sin descripcion util",
                inferred_category=category,
                category_support=3,
                category_margin=2.0,
            )

            assert engine.decide(product, signal) is None, category

    def test_blocked_category_is_reported(self, engine, make_snapshot):
        product = make_snapshot(name="Camiseta", category="camisetas_y_tops")
        signal = make_signal(
            "camiseta",
            inferred_category="calzado",
            inferred_gender="femenino",
            gender_confidence=0.9,
            gender_support=2,
        )

        draft = engine.decide(product, signal)

        assert draft.to_category == "camisetas_y_tops"
        assert "blocked:category:calzado" in draft.reasons
        assert draft.changed_fields == ["gender"]


class TestThresholds:
    """Test per-field move thresholds."""

    def test_weak_signal_never_moves_category(self, engine, make_snapshot):
        product = make_snapshot(name="Camisa")
        signal = make_signal("camisa", inferred_category="camisas_y_blusas", signal_strength=SignalStrength.WEAK)

        assert engine.decide(product, signal) is None

    def test_moderate_fills_empty_category(self, engine, make_snapshot):
        product = make_snapshot(name="Camisa")
        signal = make_signal("camisa", inferred_category="camisas_y_blusas", signal_strength=SignalStrength.MODERATE)

        draft = engine.decide(product, signal)

        assert draft.to_category == "camisas_y_blusas"
        assert draft.confidence == pytest.approx(0.80)

    def test_moderate_does_not_overwrite_category(self, engine, make_snapshot):
        product = make_snapshot(name="Camisa", category="camisetas_y_tops")
        signal = make_signal("camisa", inferred_category="camisas_y_blusas", signal_strength=SignalStrength.MODERATE)

        assert engine.decide(product, signal) is None

    def test_unknown_stored_values_count_as_empty(self, engine, make_snapshot):
        product = make_snapshot(name="Camisa", category="Ropa rara", gender="otro")
        signal = make_signal("camisa", inferred_category="camisas_y_blusas", signal_strength=SignalStrength.MODERATE)

        draft = engine.decide(product, signal)

        assert draft.from_category is None
        assert draft.from_gender is None
        assert draft.to_category == "camisas_y_blusas"

    def test_gender_fallback_confidence(self, engine, make_snapshot):
        product = make_snapshot(name="Vestido")
        signal = make_signal("vestido", inferred_gender="femenino", gender_support=1)

        draft = engine.decide(product, signal)

        assert draft.field_scores["gender"]["confidence"] == pytest.approx(0.85)


class TestCrossField:
    """Test category/subcategory consistency."""

    def test_category_move_resets_foreign_subcategory(self, engine, make_snapshot):
        product = make_snapshot(
            name="Pantalón de dril",
            category="camisas_y_blusas",
            subcategory="camisa_de_lino",
        )
        signal = make_signal("pantalon de dril", inferred_category="pantalones_no_denim")

        draft = engine.decide(product, signal)

        assert draft.to_category == "pantalones_no_denim"
        assert draft.to_subcategory is None
        assert draft.from_subcategory == "camisa_de_lino"
        assert draft.field_scores["subcategory"] == {"value": None, "reset": True}
        assert "reset:subcategory_category_mismatch" in draft.reasons

    def test_reset_alone_is_not_a_proposal(self, engine, make_snapshot):
        """A blocked category move leaves the subcategory untouched."""
        product = make_snapshot(name="Camisa", category="camisas_y_blusas", subcategory="camisa_de_lino")
        signal = make_signal("camisa", inferred_category="calzado")

        assert engine.decide(product, signal) is None

    def test_subcategory_outside_final_category_is_blocked(self, engine, make_snapshot):
        product = make_snapshot(name="Pantalón de lino", category="camisas_y_blusas")
        signal = make_signal(
            "pantalon de lino",
            inferred_category="pantalones_no_denim",
            signal_strength=SignalStrength.WEAK,
            inferred_subcategory="pantalon_de_lino",
            subcategory_name_backed=True,
            inferred_gender="femenino",
            gender_confidence=0.9,
            gender_support=2,
        )

        draft = engine.decide(product, signal)

        assert draft.to_category == "camisas_y_blusas"
        assert draft.to_subcategory is None
        assert "blocked:subcategory_category_mismatch:pantalon_de_lino" in draft.reasons


class TestNameBackedPolicy:
    """Test the name-backed subcategory switch."""

    def _signal(self):
        return make_signal(
            "camisa camisa de lino",
            inferred_category="camisas_y_blusas",
            inferred_subcategory="camisa_de_lino",
            subcategory_support=2,
            subcategory_name_backed=False,
            inferred_gender="femenino",
            gender_confidence=0.9,
            gender_support=2,
        )

    def test_not_name_backed_is_blocked_by_default(self, engine, make_snapshot):
        product = make_snapshot(name="Camisa", category="camisas_y_blusas")

        draft = engine.decide(product, self._signal())

        assert draft.to_subcategory is None
        assert "blocked:subcategory_not_name_backed:camisa_de_lino" in draft.reasons

    def test_policy_off_allows_move(self, base_index, make_snapshot):
        engine = DecisionEngine(base_index, DecisionPolicy(require_name_backed_subcategory=False))
        product = make_snapshot(name="Camisa", category="camisas_y_blusas")

        draft = engine.decide(product, self._signal())

        assert draft.to_subcategory == "camisa_de_lino"
        assert draft.field_scores["subcategory"]["confidence"] == pytest.approx(0.86)

    def test_policy_from_settings(self, reseed_config):
        reseed_config.require_name_backed_subcategory = False

        policy = DecisionPolicy.from_settings(reseed_config)

        assert policy.require_name_backed_subcategory is False


class TestGenderThreshold:
    """Test DecisionPolicy.gender_threshold."""

    @pytest.mark.parametrize("current,target,category,support,expected", [
        (None, "femenino", "vestidos", 1, 0.64),
        ("femenino", "masculino", "camisetas_y_tops", 2, 0.79),
        ("no_binario_unisex", "masculino", "camisetas_y_tops", 2, 0.87),
        ("femenino", "infantil", "camisetas_y_tops", 2, 0.90),
        (None, "infantil", "camisetas_y_tops", 1, 0.64),
        (None, "femenino", "hogar_y_lifestyle", 1, 0.90),
        (None, "no_binario_unisex", "hogar_y_lifestyle", 1, 0.64),
        (None, "infantil", "joyeria_y_bisuteria", 1, 0.92),
        ("femenino", "masculino", "camisetas_y_tops", 1, 0.86),
    ])
    def test_thresholds(self, current, target, category, support, expected):
        policy = DecisionPolicy()

        assert policy.gender_threshold(current, target, category, support) == pytest.approx(expected)


class TestShapes:
    """Test draft, field and scoring result shapes."""

    def test_field_change_dict(self):
        change = FieldChange(value="vestidos", confidence=0.912345, support=3, margin=1.5)

        assert change.to_dict() == {
            "value": "vestidos",
            "confidence": 0.9123,
            "support": 3,
            "margin": 1.5,
        }

    def test_reasons_are_capped(self, engine, make_snapshot):
        product = make_snapshot(name="Vestido")
        signal = make_signal(
            "vestido",
            inferred_gender="femenino",
            gender_confidence=0.9,
            gender_support=2,
            gender_reasons=tuple(f"kw:gender_{i}" for i in range(20)),
        )

        draft = engine.decide(product, signal)

        assert len(draft.reasons) == MAX_REASONS

    def test_seo_hints_are_capped(self, engine, make_snapshot):
        product = make_snapshot(name="Vestido", seo_tags=[f"tag{i}" for i in range(8)])
        signal = make_signal("vestido", inferred_gender="femenino", gender_confidence=0.9, gender_support=2)

        draft = engine.decide(product, signal)

        assert draft.seo_category_hints == ["tag0", "tag1", "tag2", "tag3", "tag4"]

    def test_to_row(self):
        product_id = uuid4()
        draft = ProposalDraft(
            product_id=product_id,
            from_category=None,
            from_subcategory=None,
            from_gender=None,
            to_category="vestidos",
            to_subcategory=None,
            to_gender=None,
            confidence=0.8,
            score_support=2,
            margin_ratio=3.0,
            source_count=2,
            reasons=["signal:moderate"],
            field_scores={"category": {"value": "vestidos"}},
        )

        row = draft.to_row("auto_reseed_manual_20240101_000000", "20240101_000000")

        assert row["product_id"] == product_id
        assert row["source"] == "auto_reseed_manual_20240101_000000"
        assert row["run_key"] == "20240101_000000"
        assert row["to_category"] == "vestidos"
        assert row["reasons"] == ["signal:moderate"]
        assert "status" not in row

    def test_scoring_result(self):
        product_id = uuid4()

        ok = ScoringResult.success(product_id, None)
        failed = ScoringResult.failure(product_id, ValueError("bad record"))

        assert ok.ok
        assert not failed.ok
        assert failed.error == "bad record"
        assert failed.error_type == "ValueError"
