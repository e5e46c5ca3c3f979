"""
Translate query parameters into declarative filter conditions.

Conditions describe *what* to match; the store layer decides how
(see `string_analyzer.crud.string_record.get_all_strings`).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from string_analyzer.exceptions import InvalidFilterError

# Supported comparison operators
EQ = "eq"
GT = "gt"
LT = "lt"
RANGE = "range"
CONTAINS = "contains"
CONTAINS_ANY = "contains_any"

# Integer columns are signed 64-bit in every supported store
MIN_INT = -(2 ** 63)
MAX_INT = 2 ** 63 - 1


@dataclass(frozen=True)
class Condition:
    """A single restriction on one record field."""

    field: str
    op: str
    value: Any


@dataclass
class FilterSet:
    conditions: List[Condition] = field(default_factory=list)
    applied: Dict[str, Any] = field(default_factory=dict)

    def add(self, condition: Condition, **applied):
        self.conditions.append(condition)
        self.applied.update(applied)

    def __bool__(self) -> bool:
        return bool(self.conditions)


def parse_bool(name: str, raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise InvalidFilterError(name, f"{name} must be 'true' or 'false'")


def parse_int(name: str, raw: str) -> int:
    try:
        number = int(raw.strip())
    except (TypeError, ValueError):
        raise InvalidFilterError(name, f"{name} must be an integer")
    if not MIN_INT <= number <= MAX_INT:
        raise InvalidFilterError(name, f"{name} is out of range")
    return number


def parse_character(name: str, raw: str) -> str:
    if len(raw) != 1:
        raise InvalidFilterError(name, f"{name} must be a single character")
    return raw


def build_filters(params: Mapping[str, str]) -> FilterSet:
    """
    Build a FilterSet from list query parameters.

    Recognized: is_palindrome, min_length, max_length, word_count,
    contains_character. Anything else is ignored.

    Raises:
        InvalidFilterError: a recognized parameter has an unusable value
    """
    filters = FilterSet()

    is_palindrome = params.get("is_palindrome")
    if is_palindrome is not None:
        expected = parse_bool("is_palindrome", is_palindrome)
        filters.add(Condition("is_palindrome", EQ, expected), is_palindrome=expected)

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    if params.get("min_length") is not None:
        min_length = parse_int("min_length", params["min_length"])
    if params.get("max_length") is not None:
        max_length = parse_int("max_length", params["max_length"])

    # Both bounds end up in one inclusive range on the same field
    if min_length is not None or max_length is not None:
        applied = {}
        if min_length is not None:
            applied["min_length"] = min_length
        if max_length is not None:
            applied["max_length"] = max_length
        filters.add(Condition("length", RANGE, (min_length, max_length)), **applied)

    word_count = params.get("word_count")
    if word_count is not None:
        expected_words = parse_int("word_count", word_count)
        filters.add(Condition("word_count", EQ, expected_words), word_count=expected_words)

    contains_character = params.get("contains_character")
    if contains_character is not None:
        character = parse_character("contains_character", contains_character)
        filters.add(Condition("value", CONTAINS, character), contains_character=character)

    return filters
