import math
from typing import List

from app.core.models import CheckResults, Recommendation
from app.core.rules import ScoringWeights

PUBLISH_THRESHOLD = 70


def aggregate(results: CheckResults, weights: ScoringWeights = ScoringWeights()) -> tuple[int, bool]:
    """Weighted mean of the scored checks and the publish decision.

    Checks without a score are left out of both numerator and denominator.
    When nothing was scored the result is 0, which never publishes.
    """
    weight_map = weights.as_dict()
    total = 0.0
    used = 0.0
    for name, score in results.scores().items():
        if score is None:
            continue
        total += score * weight_map[name]
        used += weight_map[name]
    overall = _round_half_up(total / used) if used > 0 else 0
    return overall, overall >= PUBLISH_THRESHOLD


def build_recommendations(results: CheckResults) -> List[Recommendation]:
    # Fixed category order, not sorted by priority.
    recommendations: List[Recommendation] = []

    grammar = results.grammar
    if grammar.status in ("warning", "fail"):
        recommendations.append(
            Recommendation(
                category="grammar",
                priority="high",
                action="Fix grammar issues and improve readability",
                details=list(grammar.suggestions) or ["Review grammar and sentence structure"],
            )
        )

    adsense = results.adsense
    if adsense.violations:
        recommendations.append(
            Recommendation(
                category="adsense",
                priority="critical",
                action="Address AdSense policy violations",
                details=[item.message for item in adsense.violations],
            )
        )
    if adsense.warnings:
        recommendations.append(
            Recommendation(
                category="adsense",
                priority="medium",
                action="Improve content quality for AdSense",
                details=[item.message for item in adsense.warnings],
            )
        )

    facts = results.facts
    if facts.status == "fail":
        recommendations.append(
            Recommendation(
                category="facts",
                priority="critical",
                action="Verify or remove unsubstantiated claims",
                details=[item.claim for item in facts.claims if item.rating.strip().lower() == "false"],
            )
        )

    if results.seo.issues:
        recommendations.append(
            Recommendation(
                category="seo",
                priority="medium",
                action="Optimize for search engines",
                details=list(results.seo.issues),
            )
        )

    return recommendations


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
