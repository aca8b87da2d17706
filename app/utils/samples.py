import json
import os
from typing import Any, Dict

SAMPLES_PATH = os.path.join(os.path.dirname(__file__), "..", "storage", "sample_articles.json")


def load_samples() -> Dict[str, Dict[str, Any]]:
    with open(SAMPLES_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)
