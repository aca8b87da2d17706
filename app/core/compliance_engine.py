import asyncio
import logging
import time
from dataclasses import replace
from functools import partial
from typing import Awaitable, Callable, TypeVar

from app.core.config import Settings
from app.core.models import (
    AdsenseCheck,
    CheckResults,
    ComplianceReport,
    ComplianceRequest,
    FactsCheck,
    GrammarCheck,
    SeoCheck,
)
from app.core.rules import DEFAULT_RULES, ComplianceRules
from app.core.scoring import aggregate, build_recommendations
from app.pipelines.adsense import ToxicityClassifier, run_adsense_pipeline
from app.pipelines.facts import ClaimExtractor, ClaimSearch, RegexClaimExtractor, run_facts_pipeline
from app.pipelines.grammar import GrammarChecker, run_grammar_pipeline
from app.pipelines.seo import run_seo_pipeline
from app.services.factcheck import search_claims
from app.services.languagetool import check_text
from app.services.perspective import analyze_toxicity
from app.utils.logging import error_fields, get_logger, log_event

LOGGER = get_logger("core.compliance_engine")

T = TypeVar("T")


class ComplianceEngine:
    """Runs the four evaluators concurrently and folds them into one report.

    Each branch owns its failures: an exception or a missed deadline turns
    that branch into an ``error`` result and the siblings carry on.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        rules: ComplianceRules | None = None,
        grammar_checker: GrammarChecker | None = None,
        toxicity_classifier: ToxicityClassifier | None = None,
        claim_search: ClaimSearch | None = None,
        claim_extractor: ClaimExtractor | None = None,
    ) -> None:
        self.settings = settings
        self.rules = rules or _rules_for(settings)
        self.grammar_checker = grammar_checker or partial(
            check_text,
            url=settings.language_tool_url,
            api_key=settings.language_tool_api_key,
            username=settings.language_tool_username,
            language=self.rules.grammar.language,
            enabled_rules=self.rules.grammar.enabled_rules,
            timeout=settings.http_timeout_s,
        )
        self.toxicity_classifier = toxicity_classifier or partial(
            analyze_toxicity,
            api_key=settings.perspective_api_key,
            url=settings.perspective_url,
            timeout=settings.http_timeout_s,
        )
        self.claim_search = claim_search or partial(
            search_claims,
            api_key=settings.fact_check_api_key,
            url=settings.fact_check_url,
            timeout=settings.http_timeout_s,
        )
        self.claim_extractor = claim_extractor or RegexClaimExtractor.from_rules(self.rules.facts)

    async def check(self, request: ComplianceRequest) -> ComplianceReport:
        started = time.perf_counter()
        log_event(
            LOGGER,
            "compliance_request",
            chars=len(request.content),
            has_title=bool(request.title),
            images=len(request.images),
        )

        grammar, adsense, facts, seo = await asyncio.gather(
            self._run_branch(
                "grammar",
                lambda: run_grammar_pipeline(request.content, self.grammar_checker, self.rules.grammar),
                lambda: GrammarCheck(status="error", message="Grammar check unavailable"),
            ),
            self._run_branch(
                "adsense",
                lambda: run_adsense_pipeline(
                    request.content,
                    request.title,
                    request.meta_description,
                    request.images,
                    self.toxicity_classifier,
                    self.rules.adsense,
                ),
                lambda: AdsenseCheck(status="error", message="Compliance check unavailable"),
            ),
            self._run_branch(
                "facts",
                lambda: run_facts_pipeline(
                    request.content,
                    request.title,
                    self.claim_search,
                    self.claim_extractor,
                    self.rules.facts,
                ),
                lambda: FactsCheck(status="error", message="Fact checking unavailable"),
            ),
            self._run_branch(
                "seo",
                lambda: _as_coroutine(
                    run_seo_pipeline(request.content, request.title, request.meta_description, self.rules.seo)
                ),
                lambda: SeoCheck(status="error", message="SEO check unavailable"),
            ),
        )

        results = CheckResults(grammar=grammar, adsense=adsense, facts=facts, seo=seo)
        score, can_publish = aggregate(results, self.rules.weights)
        recommendations = build_recommendations(results)
        log_event(
            LOGGER,
            "compliance_scored",
            score=score,
            can_publish=can_publish,
            statuses={name: getattr(results, name).status for name in ("grammar", "adsense", "facts", "seo")},
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return ComplianceReport(
            score=score,
            checks=results,
            recommendations=recommendations,
            can_publish=can_publish,
        )

    async def _run_branch(
        self,
        name: str,
        start: Callable[[], Awaitable[T]],
        on_error: Callable[[], T],
    ) -> T:
        log_event(LOGGER, "evaluator_start", evaluator=name)
        try:
            result = await asyncio.wait_for(start(), timeout=self.settings.request_timeout_s)
        except asyncio.TimeoutError:
            log_event(LOGGER, "evaluator_timeout", evaluator=name, timeout_s=self.settings.request_timeout_s)
            return on_error()
        except Exception as exc:
            log_event(LOGGER, "evaluator_failed", level=logging.ERROR, evaluator=name, **error_fields(exc))
            return on_error()
        log_event(LOGGER, "evaluator_done", evaluator=name)
        return result


def _rules_for(settings: Settings) -> ComplianceRules:
    return replace(
        DEFAULT_RULES,
        adsense=replace(DEFAULT_RULES.adsense, match_whole_words=settings.match_whole_words),
        grammar=replace(DEFAULT_RULES.grammar, language=settings.language_tool_language),
    )


async def _as_coroutine(value: T) -> T:
    return value
