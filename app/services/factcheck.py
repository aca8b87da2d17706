from typing import Any, Dict, List

import httpx

from app.core.config import FACT_CHECK_URL
from app.utils.logging import get_logger, log_event

LOGGER = get_logger("services.factcheck")


class FactCheckError(RuntimeError):
    pass


async def search_claims(
    query: str,
    *,
    api_key: str,
    url: str = FACT_CHECK_URL,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> List[Dict[str, Any]]:
    """Search published fact checks for ``query``.

    Returns one ``{textualRating, publisher}`` entry per matching claim, taken
    from its first review, in the order the API ranks them. Claims without a
    review are skipped.
    """
    if not api_key:
        raise FactCheckError("GOOGLE_FACT_CHECK_API_KEY is not set")

    log_event(LOGGER, "factcheck_request", chars=len(query))
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=5.0), transport=transport) as client:
        response = await client.get(
            url,
            params={"query": query},
            headers={"Accept": "application/json", "X-Goog-Api-Key": api_key},
        )
        response.raise_for_status()
        data = response.json()

    results: List[Dict[str, Any]] = []
    for claim in data.get("claims", []):
        reviews = claim.get("claimReview") or []
        if not reviews:
            continue
        review = reviews[0]
        publisher = review.get("publisher") or {}
        results.append(
            {
                "textualRating": review.get("textualRating"),
                "publisher": publisher.get("name"),
            }
        )
    log_event(LOGGER, "factcheck_response", results=len(results))
    return results
