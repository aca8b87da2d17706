import re
from typing import List

from app.core.models import SeoCheck
from app.core.rules import SeoRules

H2_PATTERN = re.compile(r"<h2[^>]*>|##\s", re.IGNORECASE)
LINK_PATTERN = re.compile(r"<a\s|\[[^\]]*\]\(", re.IGNORECASE)


def run_seo_pipeline(
    content: str,
    title: str | None,
    meta_description: str | None,
    rules: SeoRules = SeoRules(),
) -> SeoCheck:
    """Score title, meta description, heading structure and linking. Pure and synchronous."""
    issues: List[str] = []
    suggestions: List[str] = []

    if title:
        if len(title) < rules.title_min:
            issues.append(f"Title too short for SEO (minimum {rules.title_min} characters)")
        elif len(title) > rules.title_max:
            issues.append(f"Title too long for SEO (maximum {rules.title_max} characters)")
    else:
        issues.append("Missing title tag")

    if meta_description:
        if len(meta_description) < rules.meta_description_min:
            issues.append(f"Meta description too short (minimum {rules.meta_description_min} characters)")
        elif len(meta_description) > rules.meta_description_max:
            issues.append(f"Meta description too long (maximum {rules.meta_description_max} characters)")
    else:
        issues.append("Missing meta description")

    if not H2_PATTERN.search(content):
        issues.append("Missing H2 headings for content structure")

    if len(LINK_PATTERN.findall(content)) < rules.min_links:
        suggestions.append(
            f"Add more internal/external links for better SEO (minimum {rules.min_links} recommended)"
        )

    if not issues and not suggestions:
        status, score = "pass", 100
    elif len(issues) <= 1 and len(suggestions) <= 1:
        status, score = "warning", 80 - len(issues) * 10 - len(suggestions) * 5
    else:
        status, score = "fail", max(0, 60 - len(issues) * 10 - len(suggestions) * 5)

    return SeoCheck(status=status, score=score, issues=issues, suggestions=suggestions)
