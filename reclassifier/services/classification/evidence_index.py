"""Keyword evidence index built once per taxonomy.

``TaxonomyIndex.build`` turns a ``Taxonomy`` into immutable per-category and
per-subcategory keyword sets:

1. Label tokens: the slug/label phrase plus every token that is not a
   connector or modifier ("no X" drops both words)
2. Curated synonyms from ``dictionaries.SUBCATEGORY_SYNONYMS`` and the
   taxonomy's own synonyms
3. Category heuristics (plating words for jewelry, ankle disambiguators for
   socks and anklets)

The index is a plain value: build it at process start and pass it to the
harvester and the decision engine. Nothing in this module keeps global
mutable state.

Example:
    index = TaxonomyIndex.build(build_base_taxonomy())
    ranked = index.rank_categories(NormalizedText.of("Blusa manga larga de lino"))
    # ranked[0].key == "camisas_y_blusas"
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process

from reclassifier.errors.exceptions import TaxonomyError
from reclassifier.models.taxonomy import Taxonomy
from reclassifier.services.classification import dictionaries as kw
from reclassifier.services.classification.text import (
    NormalizedText,
    normalize_enum_value,
    normalize_keywords,
    normalize_text,
    score_text,
)


JEWELRY_CATEGORIES = frozenset({"joyeria_y_bisuteria"})
SOCK_SUBCATEGORY_TOKENS = frozenset({"medias", "calcetines", "socks"})
ANKLET_SUBCATEGORY_TOKENS = frozenset({"tobilleras", "tobillera"})

# Minimum rapidfuzz ratio for resolving a vendor category string
VENDOR_CATEGORY_FUZZY_CUTOFF = 86.0


@dataclass(frozen=True)
class SubcategoryEvidence:
    """Keyword evidence for one subcategory."""
    key: str
    category: str
    position: int
    keywords: FrozenSet[str]
    specific_keywords: FrozenSet[str]
    required_evidence: Tuple[str, ...]


@dataclass(frozen=True)
class CategoryEvidence:
    """Keyword evidence for one category and its subcategories."""
    key: str
    position: int
    head_keywords: FrozenSet[str]
    keywords: FrozenSet[str]
    generic_tokens: FrozenSet[str]
    required_evidence: Tuple[str, ...]
    subcategories: Tuple[SubcategoryEvidence, ...]

    @property
    def subcategory_keys(self) -> FrozenSet[str]:
        return frozenset(sub.key for sub in self.subcategories)

    def is_generic(self, keyword: str) -> bool:
        """True when every token is category-generic or a modifier."""
        return all(
            token in self.generic_tokens or token in kw.LABEL_STOPWORDS
            for token in keyword.split()
        )


@dataclass(frozen=True)
class Candidate:
    """A scored category or subcategory candidate."""
    key: str
    score: int
    matched: Tuple[str, ...]
    position: int
    specific_score: int = 0
    specific_matched: Tuple[str, ...] = ()

    @property
    def support(self) -> int:
        return len(self.matched)


@dataclass(frozen=True)
class CrossCategoryGuard:
    """Keywords that stop counting for a category in a given context."""
    name: str
    category: str
    keywords: FrozenSet[str]
    applies: Callable[[NormalizedText], bool]


_BOTA_FIT_PHRASES = normalize_keywords([
    "bota recta", "bota ancha", "bota amplia", "bota muy ancha", "bota campana",
    "bota flare", "bota resortada", "bota tubo", "bota recto", "bota skinny",
    "bota medio", "bota media", "bota palazzo", "bota ajustable", "botas ajustables",
    "efecto en bota",
])
_BOTTOMS_CONTEXT = normalize_keywords([
    "pantalon", "pantalones", "jogger", "cargo", "palazzo", "culotte", "legging",
    "leggings", "jean", "jeans",
])
_OTHER_SHOE_WORDS = normalize_keywords([
    "tenis", "sneaker", "sneakers", "sandalia", "sandalias", "mocasin", "loafer",
    "zapato", "zapatos", "botin", "botines",
])
_SHIRT_WORDS = normalize_keywords(["camisa", "camisas", "blusa", "blusas", "shirt", "polo"])
_JEWELRY_CONTEXT = normalize_keywords([
    "oro", "plata", "anillo", "arete", "aretes", "joya", "joyeria", "dije",
    "gold", "silver", "bisuteria",
])
_BODY_CARE_PHRASES = normalize_keywords([
    "body cream", "body splash", "body lotion", "body mist", "crema corporal",
    "locion", "crema", "exfoliante",
])
_SOCK_CONTEXT = normalize_keywords(["medias", "calcetin", "calcetines", "sock", "socks", "soquete", "soquetes"])


def looks_like_pants_bota_fit(text: NormalizedText) -> bool:
    """"Bota" describing a trouser leg rather than a boot."""
    if text.contains_any(_BOTA_FIT_PHRASES):
        return True
    if text.contains_any(_OTHER_SHOE_WORDS):
        return False
    return text.contains_any(_BOTTOMS_CONTEXT) and text.contains_any(("bota", "botas"))


def looks_like_shirt_collar(text: NormalizedText) -> bool:
    return text.contains_any(_SHIRT_WORDS) and not text.contains_any(_JEWELRY_CONTEXT)


def looks_like_body_care(text: NormalizedText) -> bool:
    return text.contains_any(_BODY_CARE_PHRASES)


def has_sock_context(text: NormalizedText) -> bool:
    return text.contains_any(_SOCK_CONTEXT)


CROSS_CATEGORY_GUARDS: Tuple[CrossCategoryGuard, ...] = (
    CrossCategoryGuard(
        name="pants_bota_fit",
        category="calzado",
        keywords=frozenset({"bota", "botas"}),
        applies=looks_like_pants_bota_fit,
    ),
    CrossCategoryGuard(
        name="shirt_collar",
        category="joyeria_y_bisuteria",
        keywords=frozenset({"collar", "collares"}),
        applies=looks_like_shirt_collar,
    ),
    CrossCategoryGuard(
        name="body_care_top",
        category="camisetas_y_tops",
        keywords=frozenset({"top", "tops", "body", "bodysuit"}),
        applies=looks_like_body_care,
    ),
    CrossCategoryGuard(
        name="sock_anklet",
        category="joyeria_y_bisuteria",
        keywords=frozenset({"tobillera", "tobilleras"}),
        applies=has_sock_context,
    ),
)


def label_keywords(label: str) -> List[str]:
    """Phrase plus meaningful tokens of a slug or human label.

    >>> label_keywords("pantalon_skinny_no_denim")
    ['pantalon skinny no denim', 'pantalon', 'skinny']
    """
    phrase = normalize_text(label)
    tokens = phrase.split()
    keywords = [phrase] if len(tokens) > 1 else []
    skip_next = False
    for token in tokens:
        if skip_next:
            skip_next = False
            continue
        if token == "no":
            skip_next = True
            continue
        if token in kw.LABEL_STOPWORDS or len(token) < 3 or token.isdigit():
            continue
        keywords.append(token)
    return keywords


def _without_bare_stopwords(keywords: Iterable[str]) -> List[str]:
    return [k for k in keywords if " " in k or (k not in kw.LABEL_STOPWORDS and len(k) > 1)]


def _heuristic_keywords(category_key: str, subcategory_key: str) -> List[str]:
    sub_tokens = set(subcategory_key.split("_"))
    extra: List[str] = []
    if category_key in JEWELRY_CATEGORIES:
        extra.extend(kw.JEWELRY_PLATING_KEYWORDS)
        if sub_tokens & ANKLET_SUBCATEGORY_TOKENS:
            extra.extend(kw.ANKLET_DISAMBIGUATORS)
    if sub_tokens & SOCK_SUBCATEGORY_TOKENS:
        extra.extend(kw.SOCK_DISAMBIGUATORS)
    return extra


@dataclass(frozen=True)
class TaxonomyIndex:
    """Immutable keyword index for one taxonomy version.

    Attributes:
        categories: Category evidence in declaration order
        genders: Valid gender slugs
        guards: Cross-category false-positive guards
    """

    categories: Tuple[CategoryEvidence, ...]
    genders: Tuple[str, ...]
    guards: Tuple[CrossCategoryGuard, ...] = CROSS_CATEGORY_GUARDS
    _by_category: Mapping[str, CategoryEvidence] = field(default_factory=dict, repr=False)
    _by_subcategory: Mapping[str, SubcategoryEvidence] = field(default_factory=dict, repr=False)
    _by_first_token: Mapping[str, FrozenSet[str]] = field(default_factory=dict, repr=False)
    _category_aliases: Mapping[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def build(
        cls,
        taxonomy: Taxonomy,
        guards: Sequence[CrossCategoryGuard] = CROSS_CATEGORY_GUARDS,
    ) -> "TaxonomyIndex":
        """Build the index from a taxonomy.

        Args:
            taxonomy: Validated taxonomy model
            guards: Cross-category guards to apply during ranking

        Returns:
            Ready-to-use immutable index

        Raises:
            TaxonomyError: If the taxonomy has no categories
        """
        if not taxonomy.categories:
            raise TaxonomyError("Taxonomy has no categories")

        categories: List[CategoryEvidence] = []
        for cat_position, definition in enumerate(taxonomy.categories):
            sub_keywords: List[Tuple[str, int, FrozenSet[str]]] = []
            for sub_position, sub in enumerate(definition.subcategories):
                raw = label_keywords(sub.key)
                if sub.label:
                    raw.extend(label_keywords(sub.label))
                raw.extend(_without_bare_stopwords(
                    normalize_keywords(kw.SUBCATEGORY_SYNONYMS.get(sub.key, []) + sub.synonyms)
                ))
                raw.extend(normalize_keywords(_heuristic_keywords(definition.key, sub.key)))
                sub_keywords.append((sub.key, sub_position, frozenset(normalize_keywords(raw))))

            generic_tokens = set(normalize_keywords(kw.CATEGORY_GENERIC_TOKENS.get(definition.key, [])))
            token_owners: Dict[str, int] = {}
            for _, _, keywords in sub_keywords:
                for keyword in keywords:
                    if " " not in keyword:
                        token_owners[keyword] = token_owners.get(keyword, 0) + 1
            generic_tokens.update(
                token for token, owners in token_owners.items()
                if owners >= kw.GENERIC_SHARED_SUBCATEGORY_MIN
            )
            generic_tokens = frozenset(generic_tokens)

            def is_generic(keyword: str) -> bool:
                return all(t in generic_tokens or t in kw.LABEL_STOPWORDS for t in keyword.split())

            subcategories = []
            for sub_key, sub_position, keywords in sub_keywords:
                specific = frozenset(k for k in keywords if not is_generic(k))
                curated = normalize_keywords(kw.REQUIRED_SUBCATEGORY_EVIDENCE.get(sub_key, []))
                required = curated or tuple(sorted(specific)) or tuple(sorted(keywords))
                subcategories.append(SubcategoryEvidence(
                    key=sub_key,
                    category=definition.key,
                    position=sub_position,
                    keywords=keywords,
                    specific_keywords=specific,
                    required_evidence=required,
                ))

            head = frozenset(normalize_keywords(
                kw.CATEGORY_HEAD_KEYWORDS.get(definition.key, []) + definition.synonyms
            ))
            label_phrases = [normalize_text(definition.key)]
            if definition.label:
                label_phrases.append(normalize_text(definition.label))
            all_keywords = set(head)
            all_keywords.update(p for p in label_phrases if " " in p)
            for sub in subcategories:
                all_keywords.update(sub.keywords)

            required = normalize_keywords(kw.REQUIRED_CATEGORY_EVIDENCE.get(definition.key, []))
            if not required:
                required = tuple(sorted(head)) or tuple(sorted(all_keywords))

            categories.append(CategoryEvidence(
                key=definition.key,
                position=cat_position,
                head_keywords=head,
                keywords=frozenset(all_keywords),
                generic_tokens=generic_tokens,
                required_evidence=required,
                subcategories=tuple(subcategories),
            ))

        by_first_token: Dict[str, set] = {}
        for category in categories:
            for keyword in category.keywords:
                by_first_token.setdefault(keyword.split()[0], set()).add(keyword)
        for guard in guards:
            for keyword in guard.keywords:
                by_first_token.setdefault(keyword.split()[0], set()).add(keyword)

        return cls(
            categories=tuple(categories),
            genders=tuple(taxonomy.genders),
            guards=tuple(guards),
            _by_category=MappingProxyType({c.key: c for c in categories}),
            _by_subcategory=MappingProxyType({s.key: s for c in categories for s in c.subcategories}),
            _by_first_token=MappingProxyType({k: frozenset(v) for k, v in by_first_token.items()}),
            _category_aliases=MappingProxyType(cls._build_category_aliases(taxonomy, categories)),
        )

    @staticmethod
    def _build_category_aliases(
        taxonomy: Taxonomy,
        categories: Sequence[CategoryEvidence],
    ) -> Dict[str, str]:
        """Normalized vendor-facing names → category key (ambiguous names dropped)."""
        owners: Dict[str, set] = {}
        for definition, evidence in zip(taxonomy.categories, categories):
            names = [definition.key, definition.display_label, *definition.synonyms]
            names.extend(evidence.head_keywords)
            for name in normalize_keywords(names):
                owners.setdefault(name, set()).add(definition.key)
        return {name: next(iter(keys)) for name, keys in owners.items() if len(keys) == 1}

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def category(self, key: Optional[str]) -> Optional[CategoryEvidence]:
        if key is None:
            return None
        return self._by_category.get(key)

    def subcategory(self, key: Optional[str]) -> Optional[SubcategoryEvidence]:
        if key is None:
            return None
        return self._by_subcategory.get(key)

    def category_keys(self) -> List[str]:
        return [category.key for category in self.categories]

    def home_category(self, subcategory: Optional[str]) -> Optional[str]:
        sub = self.subcategory(subcategory)
        return sub.category if sub else None

    def is_valid_subcategory(self, category: Optional[str], subcategory: Optional[str]) -> bool:
        sub = self.subcategory(subcategory)
        return sub is not None and sub.category == category

    def normalize_category(self, value) -> Optional[str]:
        return normalize_enum_value(value, self._by_category)

    def normalize_subcategory(self, category: Optional[str], value) -> Optional[str]:
        """Subcategory slug if it belongs to ``category``, else ``None``."""
        slug = normalize_enum_value(value, self._by_subcategory)
        if slug and self.is_valid_subcategory(category, slug):
            return slug
        return None

    def normalize_gender(self, value) -> Optional[str]:
        return normalize_enum_value(value, self.genders)

    def required_category_evidence(self, category: str) -> Tuple[str, ...]:
        evidence = self.category(category)
        return evidence.required_evidence if evidence else ()

    def required_subcategory_evidence(self, subcategory: str) -> Tuple[str, ...]:
        evidence = self.subcategory(subcategory)
        return evidence.required_evidence if evidence else ()

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def match_keywords(self, text: NormalizedText) -> FrozenSet[str]:
        """Every indexed keyword present in the text."""
        found = set()
        for token in text.token_set:
            for keyword in self._by_first_token.get(token, ()):
                if text.contains(keyword):
                    found.add(keyword)
        return frozenset(found)

    def guarded_keywords(self, category: str, text: NormalizedText) -> FrozenSet[str]:
        """Keywords that do not count for ``category`` in this text."""
        blocked = set()
        for guard in self.guards:
            if guard.category == category and guard.applies(text):
                blocked.update(guard.keywords)
        return frozenset(blocked)

    def rank_categories(
        self,
        text: NormalizedText,
        matched: Optional[FrozenSet[str]] = None,
    ) -> List[Candidate]:
        """Categories with a positive score, best first.

        Ties are broken by taxonomy declaration order.
        """
        if matched is None:
            matched = self.match_keywords(text)
        if not matched:
            return []
        ranked = []
        for category in self.categories:
            hits = (category.keywords & matched) - self.guarded_keywords(category.key, text)
            if not hits:
                continue
            specific = [h for h in hits if not category.is_generic(h)]
            score, matched_hits = score_text(text, hits)
            specific_score, specific_hits = score_text(text, specific)
            ranked.append(Candidate(
                key=category.key,
                score=score,
                matched=tuple(matched_hits),
                position=category.position,
                specific_score=specific_score,
                specific_matched=tuple(specific_hits),
            ))
        ranked.sort(key=lambda c: (-c.score, c.position))
        return ranked

    def rank_subcategories(
        self,
        category: str,
        text: NormalizedText,
        matched: Optional[FrozenSet[str]] = None,
    ) -> List[Candidate]:
        """Subcategories of ``category`` with a positive score, best first.

        Ordering: specific (non-generic) score, then total score, then
        taxonomy declaration order.
        """
        evidence = self.category(category)
        if evidence is None:
            return []
        if matched is None:
            matched = self.match_keywords(text)
        if not matched:
            return []
        blocked = self.guarded_keywords(category, text)
        ranked = []
        for sub in evidence.subcategories:
            hits = (sub.keywords & matched) - blocked
            if not hits:
                continue
            specific = hits & sub.specific_keywords
            score, matched_hits = score_text(text, hits)
            specific_score, specific_hits = score_text(text, specific)
            ranked.append(Candidate(
                key=sub.key,
                score=score,
                matched=tuple(matched_hits),
                position=sub.position,
                specific_score=specific_score,
                specific_matched=tuple(specific_hits),
            ))
        ranked.sort(key=lambda c: (-c.specific_score, -c.score, c.position))
        return ranked

    def resolve_category(self, raw: Optional[str]) -> Optional[str]:
        """Map a free-form vendor category string to a category key.

        Tries an exact slug, then an unambiguous alias, then a rapidfuzz
        ratio match against the aliases.
        """
        slug = self.normalize_category(raw)
        if slug:
            return slug
        query = normalize_text(raw)
        if not query:
            return None
        alias = self._category_aliases.get(query)
        if alias:
            return alias
        best = process.extractOne(
            query,
            list(self._category_aliases.keys()),
            scorer=fuzz.ratio,
            score_cutoff=VENDOR_CATEGORY_FUZZY_CUTOFF,
        )
        if best is None:
            return None
        return self._category_aliases[best[0]]
