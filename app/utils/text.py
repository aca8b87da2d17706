import re
from typing import List

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_VOWELS = "aeiouy"


def tokenize(text: str) -> List[str]:
    """Whitespace-delimited, non-empty tokens."""
    return text.split()


def count_syllables(word: str) -> int:
    # Vowel-group heuristic, not a dictionary lookup.
    word = word.lower()
    count = 0
    prev_vowel = False
    for char in word:
        is_vowel = char in _VOWELS
        if is_vowel and not prev_vowel:
            count += 1
        prev_vowel = is_vowel
    if word.endswith("e"):
        count -= 1
    return max(count, 1)


def flesch_reading_ease(text: str) -> float:
    """Flesch Reading Ease clamped to [0, 100].

    Text without a sentence or a word has no meaningful ratio and scores 0.0,
    the lowest readability band.
    """
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    words = tokenize(text)
    if not sentences or not words:
        return 0.0
    syllables = sum(count_syllables(word) for word in words)
    asl = len(words) / len(sentences)
    asw = syllables / len(words)
    score = 206.835 - (1.015 * asl) - (84.6 * asw)
    return max(min(score, 100.0), 0.0)


def find_prohibited_terms(text: str, terms: List[str], *, whole_words: bool = False) -> List[str]:
    lowered = text.lower()
    if whole_words:
        return [term for term in terms if re.search(rf"\b{re.escape(term.lower())}\b", lowered)]
    return [term for term in terms if term.lower() in lowered]
