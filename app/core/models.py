from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

Status = Literal["pass", "warning", "fail", "error", "pending"]
Severity = Literal["critical", "high", "medium"]
Priority = Literal["critical", "high", "medium"]
Category = Literal["grammar", "adsense", "facts", "seo"]


@dataclass(frozen=True)
class ImageRef:
    alt: str | None = None


@dataclass(frozen=True)
class ComplianceRequest:
    content: str
    title: str | None = None
    meta_description: str | None = None
    images: List[ImageRef] = field(default_factory=list)


@dataclass(frozen=True)
class GrammarIssue:
    type: str
    message: str
    offset: int
    length: int
    replacements: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "message": self.message,
            "offset": self.offset,
            "length": self.length,
            "replacements": list(self.replacements),
        }


@dataclass(frozen=True)
class PolicyFinding:
    rule: str
    message: str
    severity: Severity
    details: Dict[str, float] | None = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"rule": self.rule, "message": self.message, "severity": self.severity}
        if self.details is not None:
            payload["details"] = dict(self.details)
        return payload


@dataclass(frozen=True)
class ClaimVerification:
    claim: str
    verified: bool
    rating: str
    source: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {"claim": self.claim, "verified": self.verified, "rating": self.rating, "source": self.source}


@dataclass(frozen=True)
class ToxicityResult:
    toxic: bool
    details: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class GrammarCheck:
    status: Status
    score: Optional[int] = None
    issues: List[GrammarIssue] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    readability_score: Optional[float] = None
    grammar_issue_count: Optional[int] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": self.status,
            "score": self.score,
            "issues": [issue.to_dict() for issue in self.issues],
            "suggestions": list(self.suggestions),
        }
        if self.readability_score is not None:
            payload["readabilityScore"] = round(self.readability_score, 2)
            payload["grammarIssueCount"] = self.grammar_issue_count
        return _with_message(payload, self.message)


@dataclass(frozen=True)
class AdsenseCheck:
    status: Status
    score: Optional[int] = None
    violations: List[PolicyFinding] = field(default_factory=list)
    warnings: List[PolicyFinding] = field(default_factory=list)
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": self.status,
            "score": self.score,
            "violations": [item.to_dict() for item in self.violations],
            "warnings": [item.to_dict() for item in self.warnings],
        }
        return _with_message(payload, self.message)


@dataclass(frozen=True)
class FactsCheck:
    status: Status
    score: Optional[int] = None
    claims: List[ClaimVerification] = field(default_factory=list)
    credibility_score: Optional[float] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": self.status,
            "score": self.score,
            "claims": [item.to_dict() for item in self.claims],
            "credibilityScore": self.credibility_score,
        }
        return _with_message(payload, self.message)


@dataclass(frozen=True)
class SeoCheck:
    status: Status
    score: Optional[int] = None
    issues: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": self.status,
            "score": self.score,
            "issues": list(self.issues),
            "suggestions": list(self.suggestions),
        }
        return _with_message(payload, self.message)


@dataclass(frozen=True)
class CheckResults:
    grammar: GrammarCheck
    adsense: AdsenseCheck
    facts: FactsCheck
    seo: SeoCheck

    def scores(self) -> Dict[str, Optional[int]]:
        return {
            "grammar": self.grammar.score,
            "adsense": self.adsense.score,
            "facts": self.facts.score,
            "seo": self.seo.score,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grammar": self.grammar.to_dict(),
            "adsense": self.adsense.to_dict(),
            "facts": self.facts.to_dict(),
            "seo": self.seo.to_dict(),
        }


@dataclass(frozen=True)
class Recommendation:
    category: Category
    priority: Priority
    action: str
    details: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "priority": self.priority,
            "action": self.action,
            "details": list(self.details),
        }


@dataclass(frozen=True)
class ComplianceReport:
    score: int
    checks: CheckResults
    recommendations: List[Recommendation]
    can_publish: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "score": self.score,
            "checks": self.checks.to_dict(),
            "recommendations": [item.to_dict() for item in self.recommendations],
            "canPublish": self.can_publish,
        }


def _with_message(payload: Dict[str, Any], message: Optional[str]) -> Dict[str, Any]:
    if message is not None:
        payload["message"] = message
    return payload
