import hashlib
import re
from collections import Counter
from typing import Dict

NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, every character counts)"""
    lowered = text.lower()
    return lowered == lowered[::-1]


def is_alphanumeric_palindrome(text: str) -> bool:
    """Check if string is palindrome once spaces and punctuation are removed"""
    cleaned = NON_ALPHANUMERIC.sub("", text.lower())
    return cleaned == cleaned[::-1]


PALINDROME_RULES = {
    "exact": is_palindrome,
    "alphanumeric": is_alphanumeric_palindrome,
}


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by whitespace"""
    return len(text.split())


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))


def analyze_string(value: str, palindrome_mode: str = "exact") -> Dict:
    """
    Analyze a string and return all computed properties.

    `palindrome_mode` selects the rule used for `is_palindrome`:
    "exact" compares the lowercased string with its reversal,
    "alphanumeric" ignores everything but letters and digits first.
    """
    check_palindrome = PALINDROME_RULES[palindrome_mode]

    return {
        "length": len(value),
        "is_palindrome": check_palindrome(value),
        "unique_characters": count_unique_characters(value),
        "word_count": count_words(value),
        "sha256_hash": compute_sha256(value),
        "character_frequency_map": get_character_frequency(value),
    }
