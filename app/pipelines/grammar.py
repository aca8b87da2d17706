from typing import Any, Awaitable, Callable, Dict, List

from app.core.models import GrammarCheck, GrammarIssue
from app.core.rules import GrammarRules
from app.utils.logging import error_fields, get_logger, log_event
from app.utils.text import flesch_reading_ease

LOGGER = get_logger("pipelines.grammar")

GrammarChecker = Callable[[str], Awaitable[List[Dict[str, Any]]]]

UNAVAILABLE = "Grammar check unavailable"


async def run_grammar_pipeline(
    content: str,
    checker: GrammarChecker,
    rules: GrammarRules = GrammarRules(),
) -> GrammarCheck:
    try:
        matches = await checker(content)
    except Exception as exc:
        log_event(LOGGER, "grammar_check_failed", **error_fields(exc))
        return GrammarCheck(status="error", message=UNAVAILABLE)

    issues = [
        GrammarIssue(
            type=match["category"],
            message=match["message"],
            offset=match["offset"],
            length=match["length"],
            replacements=list(match.get("replacements", []))[: rules.max_replacements],
        )
        for match in matches
    ]
    readability = flesch_reading_ease(content)
    issue_count = sum(1 for issue in issues if issue.type != rules.ignored_category)

    suggestions: List[str] = []
    if issue_count == 0 and readability > rules.pass_readability:
        status, score = "pass", 100
    elif issue_count < rules.warning_max_issues and readability > rules.warning_readability:
        status, score = "warning", 70
        suggestions.append("Minor grammar improvements needed")
    else:
        status, score = "fail", 40
        suggestions.append("Significant grammar and readability improvements required")

    log_event(LOGGER, "grammar_scored", status=status, issues=issue_count, readability=round(readability, 2))
    return GrammarCheck(
        status=status,
        score=score,
        issues=issues,
        suggestions=suggestions,
        readability_score=readability,
        grammar_issue_count=issue_count,
    )
