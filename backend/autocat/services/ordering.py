"""Priority bookkeeping for a user's rule list.

Every structural change (create, delete, reorder, move) goes through
:func:`reindex`, so priorities are always exactly ``1..N`` in list order.
"""

from autocat.schemas.internal import Rule, utcnow


def sort_by_priority(rules: list[Rule]) -> list[Rule]:
    return sorted(rules, key=lambda r: (r.priority, r.created_at))


def reindex(rules: list[Rule]) -> list[Rule]:
    """Assign ``priority = position + 1`` following the list order.

    Rules whose priority changes are returned as copies with a fresh
    ``updated_at``; the input list and its rules are left untouched.
    """
    now = utcnow()
    result = []
    for position, rule in enumerate(rules, start=1):
        if rule.priority != position:
            rule = rule.model_copy(update={"priority": position, "updated_at": now})
        result.append(rule)
    return result


def swap_adjacent(rules: list[Rule], index: int, offset: int) -> list[Rule]:
    """Swap the rule at ``index`` with its neighbour at ``index + offset``."""
    target = index + offset
    if not 0 <= target < len(rules):
        raise IndexError(target)
    swapped = list(rules)
    swapped[index], swapped[target] = swapped[target], swapped[index]
    return swapped
