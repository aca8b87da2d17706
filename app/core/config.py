import os
from dataclasses import dataclass
from typing import List

LANGUAGE_TOOL_URL = "https://api.languagetoolplus.com/v2/check"
PERSPECTIVE_URL = "https://commentanalyzer.googleapis.com/v1alpha1/comments:analyze"
FACT_CHECK_URL = "https://factchecktools.googleapis.com/v1alpha1/claims:search"

REQUIRED_API_KEYS = (
    "LANGUAGE_TOOL_API_KEY",
    "GOOGLE_PERSPECTIVE_API_KEY",
    "GOOGLE_FACT_CHECK_API_KEY",
)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    language_tool_url: str = LANGUAGE_TOOL_URL
    language_tool_api_key: str = ""
    language_tool_username: str = ""
    language_tool_language: str = "en-US"
    perspective_url: str = PERSPECTIVE_URL
    perspective_api_key: str = ""
    fact_check_url: str = FACT_CHECK_URL
    fact_check_api_key: str = ""
    http_timeout_s: float = 10.0
    request_timeout_s: float = 15.0
    require_api_keys: bool = True
    match_whole_words: bool = False

    def missing_api_keys(self) -> List[str]:
        values = {
            "LANGUAGE_TOOL_API_KEY": self.language_tool_api_key,
            "GOOGLE_PERSPECTIVE_API_KEY": self.perspective_api_key,
            "GOOGLE_FACT_CHECK_API_KEY": self.fact_check_api_key,
        }
        return [key for key in REQUIRED_API_KEYS if not values[key]]


def load_settings() -> Settings:
    return Settings(
        language_tool_url=os.getenv("LANGUAGE_TOOL_URL", LANGUAGE_TOOL_URL),
        language_tool_api_key=os.getenv("LANGUAGE_TOOL_API_KEY", ""),
        language_tool_username=os.getenv("LANGUAGE_TOOL_USERNAME", ""),
        language_tool_language=os.getenv("LANGUAGE_TOOL_LANGUAGE", "en-US"),
        perspective_url=os.getenv("PERSPECTIVE_URL", PERSPECTIVE_URL),
        perspective_api_key=os.getenv("GOOGLE_PERSPECTIVE_API_KEY", ""),
        fact_check_url=os.getenv("FACT_CHECK_URL", FACT_CHECK_URL),
        fact_check_api_key=os.getenv("GOOGLE_FACT_CHECK_API_KEY", ""),
        http_timeout_s=float(os.getenv("COMPLIANCE_HTTP_TIMEOUT_S", "10")),
        request_timeout_s=float(os.getenv("COMPLIANCE_REQUEST_TIMEOUT_S", "15")),
        require_api_keys=_env_flag("COMPLIANCE_REQUIRE_API_KEYS", "1"),
        match_whole_words=_env_flag("COMPLIANCE_MATCH_WHOLE_WORDS", "0"),
    )
