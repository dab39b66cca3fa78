"""Substring matching of transactions against rules.

A transaction is matched on a single piece of text: the most specific field
it has. User-entered notes beat the cleaned merchant name, which beats the
raw bank feed name. A rule matches when any of its patterns is a
case-insensitive substring of that text.
"""

from autocat.schemas.internal import Rule, Transaction


def select_search_text(transaction: Transaction) -> str | None:
    """Pick user_description, then merchant_name, then name.

    Returns the first one that is set and not blank, or ``None``.
    """
    for value in (
        transaction.user_description,
        transaction.merchant_name,
        transaction.name,
    ):
        if value is not None and value.strip():
            return value
    return None


def normalized_patterns(rule: Rule) -> tuple[str, ...]:
    return tuple(p.strip().lower() for p in rule.patterns)


def matches_text(search_text: str | None, patterns: tuple[str, ...]) -> bool:
    """``search_text`` and ``patterns`` must already be lowercased."""
    if not search_text:
        return False
    return any(pattern in search_text for pattern in patterns)


def matches(transaction: Transaction, rule: Rule) -> bool:
    """Return True when ``rule`` categorizes ``transaction``."""
    text = select_search_text(transaction)
    if text is None:
        return False
    return matches_text(text.lower(), normalized_patterns(rule))
