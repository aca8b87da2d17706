import asyncio
import re
from typing import Any, Awaitable, Callable, Dict, List, Protocol, Sequence

from app.core.models import ClaimVerification, FactsCheck
from app.core.rules import FactRules
from app.utils.logging import error_fields, get_logger, log_event

LOGGER = get_logger("pipelines.facts")

ClaimSearch = Callable[[str], Awaitable[List[Dict[str, Any]]]]


class ClaimExtractor(Protocol):
    def extract(self, content: str) -> List[str]:
        ...


class RegexClaimExtractor:
    """Pulls claim-like fragments out of text with fixed patterns.

    Matches are collected pattern by pattern, in order of appearance, and
    capped at ``max_claims``.
    """

    def __init__(self, patterns: Sequence[str], max_claims: int) -> None:
        self._patterns = [re.compile(pattern, re.IGNORECASE) for pattern in patterns]
        self._max_claims = max_claims

    @classmethod
    def from_rules(cls, rules: FactRules) -> "RegexClaimExtractor":
        return cls(rules.claim_patterns, rules.max_claims)

    def extract(self, content: str) -> List[str]:
        claims: List[str] = []
        for pattern in self._patterns:
            claims.extend(match.group(0) for match in pattern.finditer(content))
        return claims[: self._max_claims]


async def run_facts_pipeline(
    content: str,
    title: str | None,
    search: ClaimSearch,
    extractor: ClaimExtractor,
    rules: FactRules = FactRules(),
) -> FactsCheck:
    claims = extractor.extract(content)[: rules.max_claims]
    log_event(LOGGER, "claims_extracted", count=len(claims), has_title=bool(title))
    if not claims:
        return FactsCheck(status="pass", score=100, claims=[], credibility_score=100.0)

    results = list(await asyncio.gather(*(verify_claim(claim, search) for claim in claims)))
    verified = sum(1 for item in results if item.verified)
    false_claims = sum(1 for item in results if _is_false(item.rating))

    if false_claims:
        status, score, credibility = "fail", 0, 0.0
    elif verified == len(results):
        status, score, credibility = "pass", 100, 100.0
    else:
        status, score, credibility = "warning", 70, round(verified / len(results) * 100.0, 2)

    log_event(LOGGER, "facts_scored", status=status, claims=len(results), verified=verified, false=false_claims)
    return FactsCheck(status=status, score=score, claims=results, credibility_score=credibility)


async def verify_claim(claim: str, search: ClaimSearch) -> ClaimVerification:
    try:
        reviews = await search(claim)
    except Exception as exc:
        log_event(LOGGER, "claim_check_failed", **error_fields(exc))
        return ClaimVerification(claim=claim, verified=False, rating="error")

    if not reviews:
        return ClaimVerification(claim=claim, verified=False, rating="unverified")
    top = reviews[0]
    return ClaimVerification(
        claim=claim,
        verified=True,
        rating=top.get("textualRating") or "unknown",
        source=top.get("publisher"),
    )


def _is_false(rating: str) -> bool:
    return rating.strip().lower() == "false"
