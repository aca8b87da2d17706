from typing import Any, Dict, List, Sequence

import httpx

from app.core.config import LANGUAGE_TOOL_URL
from app.utils.logging import get_logger, log_event

LOGGER = get_logger("services.languagetool")


class LanguageToolError(RuntimeError):
    pass


async def check_text(
    text: str,
    *,
    url: str = LANGUAGE_TOOL_URL,
    api_key: str = "",
    username: str = "",
    language: str = "en-US",
    enabled_rules: Sequence[str] = (),
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> List[Dict[str, Any]]:
    """Lint ``text`` and return matches as ``{category, message, offset, length, replacements}``."""
    form = {"text": text, "language": language}
    if enabled_rules:
        form["enabledRules"] = ",".join(enabled_rules)
    if api_key:
        form["apiKey"] = api_key
    if username:
        form["username"] = username

    log_event(LOGGER, "languagetool_request", chars=len(text), language=language)
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=5.0), transport=transport) as client:
        response = await client.post(url, data=form, headers={"Accept": "application/json"})
        response.raise_for_status()
        data = response.json()

    matches = data.get("matches")
    if matches is None:
        raise LanguageToolError("LanguageTool response missing matches")
    log_event(LOGGER, "languagetool_response", matches=len(matches))
    return [_normalize_match(match) for match in matches]


def _normalize_match(match: Dict[str, Any]) -> Dict[str, Any]:
    rule = match.get("rule") or {}
    category = rule.get("category") or {}
    return {
        "category": str(category.get("id", "UNKNOWN")),
        "message": str(match.get("message", "")),
        "offset": int(match.get("offset", 0)),
        "length": int(match.get("length", 0)),
        "replacements": [str(item.get("value", "")) for item in match.get("replacements", [])],
    }
