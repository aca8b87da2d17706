import json
import logging
from functools import partial
from urllib.parse import parse_qs

import httpx
import pytest

from app.core.rules import AdsenseRules
from app.pipelines import adsense, facts
from app.services import factcheck, perspective
from app.services.factcheck import FactCheckError, search_claims
from app.services.languagetool import LanguageToolError, check_text
from app.services.perspective import PerspectiveError, analyze_toxicity
from app.utils.logging import JsonFormatter


def _transport(handler, seen):
    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return httpx.MockTransport(record)


@pytest.mark.asyncio
async def test_languagetool_normalizes_matches():
    seen = []
    payload = {
        "matches": [
            {
                "message": "Possible agreement error.",
                "offset": 4,
                "length": 3,
                "replacements": [{"value": "is"}, {"value": "was"}],
                "rule": {"id": "AGREEMENT", "category": {"id": "GRAMMAR"}},
            }
        ]
    }
    transport = _transport(lambda request: httpx.Response(200, json=payload), seen)
    matches = await check_text(
        "They is here.",
        url="https://lt.example/v2/check",
        api_key="key",
        username="editor",
        enabled_rules=("UPPERCASE_SENTENCE_START", "COMMA_PARENTHESIS_WHITESPACE"),
        transport=transport,
    )
    assert matches == [
        {
            "category": "GRAMMAR",
            "message": "Possible agreement error.",
            "offset": 4,
            "length": 3,
            "replacements": ["is", "was"],
        }
    ]
    form = parse_qs(seen[0].content.decode())
    assert form["text"] == ["They is here."]
    assert form["language"] == ["en-US"]
    assert form["enabledRules"] == ["UPPERCASE_SENTENCE_START,COMMA_PARENTHESIS_WHITESPACE"]
    assert form["apiKey"] == ["key"]
    assert form["username"] == ["editor"]


@pytest.mark.asyncio
async def test_languagetool_http_error_propagates():
    transport = _transport(lambda request: httpx.Response(503), [])
    with pytest.raises(httpx.HTTPStatusError):
        await check_text("text", transport=transport)


@pytest.mark.asyncio
async def test_languagetool_rejects_unexpected_payload():
    transport = _transport(lambda request: httpx.Response(200, json={"software": {}}), [])
    with pytest.raises(LanguageToolError):
        await check_text("text", transport=transport)


@pytest.mark.asyncio
async def test_perspective_requests_five_attributes():
    seen = []
    scores = {
        name: {"summaryScore": {"value": value}}
        for name, value in [
            ("TOXICITY", 0.8),
            ("SEVERE_TOXICITY", 0.2),
            ("THREAT", 0.1),
            ("INSULT", 0.3),
            ("PROFANITY", 0.4),
        ]
    }
    transport = _transport(lambda request: httpx.Response(200, json={"attributeScores": scores}), seen)
    result = await analyze_toxicity("some text", api_key="secret", transport=transport)
    assert result == {"TOXICITY": 0.8, "SEVERE_TOXICITY": 0.2, "THREAT": 0.1, "INSULT": 0.3, "PROFANITY": 0.4}
    body = json.loads(seen[0].content)
    assert body["comment"] == {"text": "some text"}
    assert set(body["requestedAttributes"]) == {"TOXICITY", "SEVERE_TOXICITY", "THREAT", "INSULT", "PROFANITY"}
    assert seen[0].headers["x-goog-api-key"] == "secret"
    assert "key" not in seen[0].url.params


@pytest.mark.asyncio
async def test_perspective_requires_key():
    with pytest.raises(PerspectiveError):
        await analyze_toxicity("text", api_key="")


@pytest.mark.asyncio
async def test_perspective_missing_attribute():
    transport = _transport(lambda request: httpx.Response(200, json={"attributeScores": {}}), [])
    with pytest.raises(PerspectiveError):
        await analyze_toxicity("text", api_key="secret", transport=transport)


@pytest.mark.asyncio
async def test_factcheck_flattens_first_reviews():
    seen = []
    payload = {
        "claims": [
            {"text": "a", "claimReview": [{"textualRating": "False", "publisher": {"name": "Africa Check"}}]},
            {"text": "b"},
            {"text": "c", "claimReview": [{"textualRating": "True", "publisher": {"name": "PesaCheck"}}]},
        ]
    }
    transport = _transport(lambda request: httpx.Response(200, json=payload), seen)
    results = await search_claims("40% of viewers stream", api_key="secret", transport=transport)
    assert results == [
        {"textualRating": "False", "publisher": "Africa Check"},
        {"textualRating": "True", "publisher": "PesaCheck"},
    ]
    assert seen[0].method == "GET"
    assert seen[0].url.params["query"] == "40% of viewers stream"
    assert seen[0].headers["x-goog-api-key"] == "secret"
    assert "key" not in seen[0].url.params


@pytest.mark.asyncio
async def test_factcheck_empty_response():
    transport = _transport(lambda request: httpx.Response(200, json={}), [])
    assert await search_claims("claim", api_key="secret", transport=transport) == []


@pytest.mark.asyncio
async def test_factcheck_requires_key():
    with pytest.raises(FactCheckError):
        await search_claims("claim", api_key="")


class _CollectLines(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.setFormatter(JsonFormatter())
        self.lines = []

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append(self.format(record))


@pytest.fixture
def log_lines():
    handler = _CollectLines()
    loggers = [adsense.LOGGER, facts.LOGGER, perspective.LOGGER, factcheck.LOGGER]
    for logger in loggers:
        logger.addHandler(handler)
    yield handler.lines
    for logger in loggers:
        logger.removeHandler(handler)


@pytest.mark.asyncio
async def test_rejected_api_keys_stay_out_of_logs(log_lines):
    claim = "40% of viewers secretly prefer X"
    forbidden = _transport(lambda request: httpx.Response(403, json={"error": "denied"}), [])
    search = partial(search_claims, api_key="SECRET-FC-KEY", transport=forbidden)
    classify = partial(analyze_toxicity, api_key="SECRET-PSP-KEY", transport=forbidden)

    verification = await facts.verify_claim(claim, search)
    toxicity = await adsense.check_toxicity("Some article text.", classify, AdsenseRules())

    assert verification.rating == "error"
    assert toxicity.toxic is False
    failures = [json.loads(line) for line in log_lines if "_check_failed" in line]
    assert [(entry["event"], entry["error"], entry["status"]) for entry in failures] == [
        ("claim_check_failed", "HTTPStatusError", 403),
        ("toxicity_check_failed", "HTTPStatusError", 403),
    ]
    output = "\n".join(log_lines)
    for secret in ("SECRET-FC-KEY", "SECRET-PSP-KEY", claim, "secretly", "Some article text"):
        assert secret not in output
