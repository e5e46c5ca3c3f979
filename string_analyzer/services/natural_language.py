"""
Keyword based translation of free text into filter conditions.

Each matcher looks for one cue in the normalised query and contributes at
most one condition, so cues combine freely:

- "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
- "strings longer than 10 characters"   -> {min_length: 11}
- "strings containing the letter z"     -> {contains_character: "z"}
- "non-palindromic two word strings"    -> {is_palindrome: false, word_count: 2}
"""
import re
from typing import Callable, List, Optional, Tuple

from string_analyzer.exceptions import UnparseableQueryError
from string_analyzer.services.query_filters import (
    CONTAINS,
    CONTAINS_ANY,
    EQ,
    GT,
    LT,
    MAX_INT,
    Condition,
    FilterSet,
)

Match = Optional[Tuple[Condition, dict]]

NEGATED_PALINDROME = re.compile(r"\b(?:not\s+(?:a\s+)?|non\s+)palindrom")
WORD_COUNT_CUES = [
    # Later entries win when several cues appear
    (1, re.compile(r"\b(?:single|one|1)\b")),
    (2, re.compile(r"\b(?:two|2)\b")),
    (3, re.compile(r"\b(?:three|3)\b")),
]
LONGER_THAN = re.compile(r"longer than (\d+)")
SHORTER_THAN = re.compile(r"shorter than (\d+)")
LETTER = re.compile(r"\bletter\s+([a-z0-9])\b")
VOWELS = "aeiou"


def normalize_query(query: str) -> str:
    return query.lower().replace("-", " ")


def match_palindrome(text: str) -> Match:
    if "palindrom" not in text:
        return None
    expected = not NEGATED_PALINDROME.search(text)
    return Condition("is_palindrome", EQ, expected), {"is_palindrome": expected}


def match_word_count(text: str) -> Match:
    if "word" not in text:
        return None
    count = None
    for value, pattern in WORD_COUNT_CUES:
        if pattern.search(text):
            count = value
    if count is None:
        return None
    return Condition("word_count", EQ, count), {"word_count": count}


def parse_length(m) -> int:
    digits = m.group(1)
    # Length check first so huge numbers never reach int()
    if len(digits.lstrip("0")) > len(str(MAX_INT)) or int(digits) > MAX_INT:
        raise UnparseableQueryError("Length in natural language query is out of range")
    return int(digits)


def match_longer_than(text: str) -> Match:
    m = LONGER_THAN.search(text)
    if not m:
        return None
    n = parse_length(m)
    return Condition("length", GT, n), {"min_length": n + 1}


def match_shorter_than(text: str) -> Match:
    m = SHORTER_THAN.search(text)
    if not m:
        return None
    n = parse_length(m)
    return Condition("length", LT, n), {"max_length": n - 1}


def match_letter(text: str) -> Match:
    m = LETTER.search(text)
    if not m:
        return None
    return Condition("value", CONTAINS, m.group(1)), {"contains_character": m.group(1)}


def match_first_vowel(text: str) -> Match:
    # Any vowel counts, the position is not checked
    if "first vowel" not in text:
        return None
    return Condition("value", CONTAINS_ANY, VOWELS), {"contains_any_character": VOWELS}


MATCHERS: List[Callable[[str], Match]] = [
    match_palindrome,
    match_word_count,
    match_longer_than,
    match_shorter_than,
    match_letter,
    match_first_vowel,
]


def interpret_query(query: str) -> FilterSet:
    """
    Derive filters from a natural language query.

    Raises:
        UnparseableQueryError: none of the matchers recognised anything
    """
    text = normalize_query(query)
    filters = FilterSet()

    for matcher in MATCHERS:
        match = matcher(text)
        if match is not None:
            condition, applied = match
            filters.add(condition, **applied)

    if not filters:
        raise UnparseableQueryError("Unable to parse natural language query")
    return filters
