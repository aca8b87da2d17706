from typing import Dict

import httpx

from app.core.config import PERSPECTIVE_URL
from app.utils.logging import get_logger, log_event

LOGGER = get_logger("services.perspective")

ATTRIBUTES = ("TOXICITY", "SEVERE_TOXICITY", "THREAT", "INSULT", "PROFANITY")


class PerspectiveError(RuntimeError):
    pass


async def analyze_toxicity(
    text: str,
    *,
    api_key: str,
    url: str = PERSPECTIVE_URL,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Dict[str, float]:
    """Return the summary score of each requested attribute, keyed by attribute name."""
    if not api_key:
        raise PerspectiveError("GOOGLE_PERSPECTIVE_API_KEY is not set")

    payload = {
        "comment": {"text": text},
        "requestedAttributes": {name: {} for name in ATTRIBUTES},
    }
    log_event(LOGGER, "perspective_request", chars=len(text))
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=5.0), transport=transport) as client:
        response = await client.post(url, headers={"X-Goog-Api-Key": api_key}, json=payload)
        response.raise_for_status()
        data = response.json()

    attribute_scores = data.get("attributeScores") or {}
    scores: Dict[str, float] = {}
    for name in ATTRIBUTES:
        try:
            scores[name] = float(attribute_scores[name]["summaryScore"]["value"])
        except (KeyError, TypeError, ValueError) as exc:
            raise PerspectiveError(f"Perspective response missing {name} score") from exc
    log_event(LOGGER, "perspective_response", toxicity=scores["TOXICITY"])
    return scores
