"""Input checks for categorization rules."""

from collections.abc import Iterable

from autocat.core.exceptions import ValidationError
from autocat.schemas.internal import Rule

MAX_PATTERNS_PER_RULE = 5
MAX_PATTERN_LENGTH = 100


def normalize_patterns(patterns: list[str]) -> list[str]:
    """Trim and validate a rule's pattern list.

    Returns the trimmed patterns in their original order and casing.
    """
    if not patterns:
        raise ValidationError("Invalid rule: at least one pattern is required")
    if len(patterns) > MAX_PATTERNS_PER_RULE:
        raise ValidationError(
            f"Invalid rule: a rule can have at most {MAX_PATTERNS_PER_RULE} patterns"
        )

    cleaned: list[str] = []
    seen: set[str] = set()
    for raw in patterns:
        pattern = raw.strip()
        if not pattern:
            raise ValidationError("Invalid rule: patterns cannot be empty")
        if len(pattern) > MAX_PATTERN_LENGTH:
            raise ValidationError(
                f"Invalid rule: patterns cannot exceed {MAX_PATTERN_LENGTH} characters"
            )
        key = pattern.lower()
        if key in seen:
            raise ValidationError(f"Invalid rule: pattern '{pattern}' is listed twice")
        seen.add(key)
        cleaned.append(pattern)
    return cleaned


def find_collision(patterns: list[str], others: Iterable[Rule]) -> str | None:
    """Return the first pattern already owned by one of ``others``, if any.

    Inactive rules count: they keep their patterns and may be re-enabled.
    """
    taken = {p.strip().lower() for rule in others for p in rule.patterns}
    for pattern in patterns:
        if pattern.lower() in taken:
            return pattern
    return None


def ensure_unique_patterns(patterns: list[str], others: Iterable[Rule]) -> None:
    collision = find_collision(patterns, others)
    if collision is not None:
        raise ValidationError(f"A rule with pattern '{collision}' already exists")


def validate_category_id(category_id: str) -> str:
    """Syntactic check only; the category is not looked up."""
    cleaned = (category_id or "").strip()
    if not cleaned:
        raise ValidationError("Invalid rule: category_id is required")
    return cleaned
