from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Tuple

STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
        "with", "by", "is", "are", "was", "were", "be", "been", "have", "has", "had",
        "do", "does", "did", "will", "would", "could", "should",
    }
)

PROHIBITED_TERMS: Tuple[str, ...] = (
    "casino",
    "gambling",
    "adult",
    "violence",
    "drugs",
    "weapons",
    "tobacco",
    "alcohol",
    "hate speech",
    "illegal",
)

CLAIM_PATTERNS: Tuple[str, ...] = (
    r"according to .+?, .+",
    r"studies show that .+",
    r"research indicates .+",
    r"\d+% of .+",
    r"statistics reveal .+",
)


@dataclass(frozen=True)
class AdsenseRules:
    min_word_count: int = 300
    max_keyword_density: float = 0.03
    min_keyword_length: int = 5
    prohibited_terms: Tuple[str, ...] = PROHIBITED_TERMS
    match_whole_words: bool = False
    stop_words: FrozenSet[str] = STOP_WORDS
    min_title_length: int = 10
    min_meta_description_length: int = 50
    min_alt_length: int = 5
    toxicity_char_limit: int = 3000
    toxicity_threshold: float = 0.7
    severe_toxicity_threshold: float = 0.5


@dataclass(frozen=True)
class SeoRules:
    title_min: int = 30
    title_max: int = 60
    meta_description_min: int = 120
    meta_description_max: int = 160
    min_links: int = 2


@dataclass(frozen=True)
class GrammarRules:
    language: str = "en-US"
    enabled_rules: Tuple[str, ...] = ("UPPERCASE_SENTENCE_START", "COMMA_PARENTHESIS_WHITESPACE")
    ignored_category: str = "TYPOS"
    pass_readability: float = 60.0
    warning_readability: float = 50.0
    warning_max_issues: int = 3
    max_replacements: int = 3


@dataclass(frozen=True)
class FactRules:
    claim_patterns: Tuple[str, ...] = CLAIM_PATTERNS
    max_claims: int = 5


@dataclass(frozen=True)
class ScoringWeights:
    grammar: float = 0.25
    adsense: float = 0.35
    facts: float = 0.20
    seo: float = 0.20

    def as_dict(self) -> Dict[str, float]:
        return {"grammar": self.grammar, "adsense": self.adsense, "facts": self.facts, "seo": self.seo}


@dataclass(frozen=True)
class ComplianceRules:
    adsense: AdsenseRules = field(default_factory=AdsenseRules)
    seo: SeoRules = field(default_factory=SeoRules)
    grammar: GrammarRules = field(default_factory=GrammarRules)
    facts: FactRules = field(default_factory=FactRules)
    weights: ScoringWeights = field(default_factory=ScoringWeights)


DEFAULT_RULES = ComplianceRules()
