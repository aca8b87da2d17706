from typing import Any, Dict, List

import pytest

from app.core.compliance_engine import ComplianceEngine
from app.core.config import Settings

LOW_TOXICITY = {
    "TOXICITY": 0.05,
    "SEVERE_TOXICITY": 0.01,
    "THREAT": 0.01,
    "INSULT": 0.02,
    "PROFANITY": 0.01,
}


def build_article(sentences: int = 70, *, heading: bool = True, links: int = 3) -> str:
    # Five words per sentence; every word of five or more characters is unique.
    parts: List[str] = []
    if heading:
        parts.append("## Overview")
    parts.extend(f"We saw item{i} at six." for i in range(sentences))
    parts.extend(f"[ref{i}](https://site{i}.example)" for i in range(links))
    return "\n".join(parts)


@pytest.fixture
def article() -> str:
    return build_article()


@pytest.fixture
def title() -> str:
    return ("Film festival coverage " * 3)[:45]


@pytest.fixture
def meta_description() -> str:
    return ("A look at the local film festival season. " * 5)[:140]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        language_tool_api_key="lt-key",
        perspective_api_key="perspective-key",
        fact_check_api_key="factcheck-key",
        request_timeout_s=2.0,
    )


class StubCheckers:
    """Records calls and returns canned checker responses."""

    def __init__(self) -> None:
        self.grammar_matches: List[Dict[str, Any]] = []
        self.toxicity: Dict[str, float] = dict(LOW_TOXICITY)
        self.claim_reviews: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[str] = []
        self.fail: set[str] = set()

    async def grammar(self, text: str) -> List[Dict[str, Any]]:
        self.calls.append("grammar")
        if "grammar" in self.fail:
            raise RuntimeError("grammar service down")
        return self.grammar_matches

    async def classify(self, text: str) -> Dict[str, float]:
        self.calls.append("toxicity")
        if "toxicity" in self.fail:
            raise RuntimeError("toxicity service down")
        return self.toxicity

    async def search(self, query: str) -> List[Dict[str, Any]]:
        self.calls.append("facts")
        if "facts" in self.fail:
            raise RuntimeError("fact check service down")
        return self.claim_reviews.get(query, [])


@pytest.fixture
def stubs() -> StubCheckers:
    return StubCheckers()


@pytest.fixture
def engine(settings: Settings, stubs: StubCheckers) -> ComplianceEngine:
    return ComplianceEngine(
        settings,
        grammar_checker=stubs.grammar,
        toxicity_classifier=stubs.classify,
        claim_search=stubs.search,
    )


@pytest.fixture
def make_article():
    return build_article
