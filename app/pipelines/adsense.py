"""Heuristic approximation of AdSense content policies.

Violations block publication, warnings only lower the score. The toxicity
sub-check fails open while the local checks always report what they find.
"""

from collections import Counter
from typing import Awaitable, Callable, Dict, List, Sequence

from app.core.models import AdsenseCheck, ImageRef, PolicyFinding, ToxicityResult
from app.core.rules import AdsenseRules
from app.utils.logging import error_fields, get_logger, log_event
from app.utils.text import find_prohibited_terms, tokenize

LOGGER = get_logger("pipelines.adsense")

ToxicityClassifier = Callable[[str], Awaitable[Dict[str, float]]]


async def run_adsense_pipeline(
    content: str,
    title: str | None,
    meta_description: str | None,
    images: Sequence[ImageRef],
    classifier: ToxicityClassifier,
    rules: AdsenseRules = AdsenseRules(),
) -> AdsenseCheck:
    violations: List[PolicyFinding] = []
    warnings: List[PolicyFinding] = []

    word_count = len(tokenize(content))
    if word_count < rules.min_word_count:
        violations.append(
            PolicyFinding(
                rule="MIN_WORD_COUNT",
                message=f"Content too short ({word_count} words). Minimum required: {rules.min_word_count}",
                severity="high",
            )
        )

    prohibited = find_prohibited_terms(content, list(rules.prohibited_terms), whole_words=rules.match_whole_words)
    if prohibited:
        violations.append(
            PolicyFinding(
                rule="PROHIBITED_CONTENT",
                message=f"Found prohibited terms: {', '.join(prohibited)}",
                severity="critical",
            )
        )

    stuffed = _stuffed_keywords(content, rules)
    if stuffed:
        warnings.append(
            PolicyFinding(
                rule="KEYWORD_STUFFING",
                message=f"Potential keyword stuffing detected for: {', '.join(stuffed)}",
                severity="medium",
            )
        )

    if not title or len(title) < rules.min_title_length:
        violations.append(PolicyFinding(rule="MISSING_TITLE", message="Title is missing or too short", severity="high"))

    if not meta_description or len(meta_description) < rules.min_meta_description_length:
        warnings.append(
            PolicyFinding(rule="WEAK_META", message="Meta description is missing or too short", severity="medium")
        )

    missing_alt = [image for image in images if not image.alt or len(image.alt) < rules.min_alt_length]
    if missing_alt:
        warnings.append(
            PolicyFinding(
                rule="MISSING_ALT_TAGS",
                message=f"{len(missing_alt)} images missing proper alt tags",
                severity="medium",
            )
        )

    toxicity = await check_toxicity(content, classifier, rules)
    if toxicity.toxic:
        violations.append(
            PolicyFinding(
                rule="TOXIC_CONTENT",
                message="Content may violate community guidelines",
                severity="critical",
                details=toxicity.details,
            )
        )

    score, status = score_findings(violations, warnings)
    log_event(
        LOGGER,
        "adsense_scored",
        status=status,
        score=score,
        violations=[item.rule for item in violations],
        warnings=[item.rule for item in warnings],
    )
    return AdsenseCheck(status=status, score=score, violations=violations, warnings=warnings)


def score_findings(violations: Sequence[PolicyFinding], warnings: Sequence[PolicyFinding]) -> tuple[int, str]:
    critical = sum(1 for item in violations if item.severity == "critical")
    high = sum(1 for item in violations if item.severity == "high")
    if critical:
        return 0, "fail"
    if high:
        return 40 - high * 10, "fail"
    if len(warnings) > 2:
        return 70 - len(warnings) * 5, "warning"
    return 100 - len(warnings) * 10, "pass"


async def check_toxicity(content: str, classifier: ToxicityClassifier, rules: AdsenseRules) -> ToxicityResult:
    # Fails open: an unavailable classifier never blocks publication.
    try:
        scores = await classifier(content[: rules.toxicity_char_limit])
        toxic = (
            scores["TOXICITY"] > rules.toxicity_threshold
            or scores["SEVERE_TOXICITY"] > rules.severe_toxicity_threshold
        )
        details = {
            "toxicity": scores["TOXICITY"],
            "severeToxicity": scores["SEVERE_TOXICITY"],
            "threat": scores["THREAT"],
            "insult": scores["INSULT"],
            "profanity": scores["PROFANITY"],
        }
    except Exception as exc:
        log_event(LOGGER, "toxicity_check_failed", **error_fields(exc))
        return ToxicityResult(toxic=False)
    return ToxicityResult(toxic=toxic, details=details)


def _stuffed_keywords(content: str, rules: AdsenseRules) -> List[str]:
    words = [
        word
        for word in tokenize(content.lower())
        if len(word) >= rules.min_keyword_length and word not in rules.stop_words
    ]
    if not words:
        return []
    counts = Counter(words)
    total = len(words)
    return [word for word, count in counts.items() if count / total > rules.max_keyword_density]
