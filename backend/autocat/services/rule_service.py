"""Categorization rule management.

Owns each user's ordered rule list and keeps two invariants on every write:
priorities are exactly 1..N, and no pattern (case-insensitive) belongs to
two rules of the same user.
"""

import structlog

from autocat.core.exceptions import InvalidOperationError, NotFoundError, ValidationError
from autocat.core.locks import UserLockRegistry
from autocat.schemas.internal import Rule, utcnow
from autocat.schemas.rule import RuleCreate, RuleUpdate
from autocat.services.ordering import reindex, sort_by_priority, swap_adjacent
from autocat.services.validation import (
    ensure_unique_patterns,
    normalize_patterns,
    validate_category_id,
)
from autocat.storage.base import RuleStore

logger = structlog.get_logger()

# Fields that cannot be cleared: a null in an update means "leave as is"
_NON_NULLABLE = ("patterns", "category_id", "is_active")


class RuleService:
    def __init__(self, store: RuleStore, locks: UserLockRegistry | None = None):
        self.store = store
        self.locks = locks if locks is not None else UserLockRegistry()

    # ── Queries ────────────────────────────────────────

    async def list_rules(self, user_id: str) -> list[Rule]:
        """All rules of the user, highest priority (1) first."""
        return sort_by_priority(await self.store.get_all(user_id))

    # ── CRUD ───────────────────────────────────────────

    async def create_rule(self, user_id: str, data: RuleCreate) -> Rule:
        """Create a rule at the end of the list (priority N+1)."""
        patterns = normalize_patterns(data.patterns)
        category_id = validate_category_id(data.category_id)

        async with self.locks.hold(user_id):
            rules = await self.list_rules(user_id)
            ensure_unique_patterns(patterns, rules)

            rule = Rule(
                user_id=user_id,
                patterns=patterns,
                category_id=category_id,
                description=data.description,
                user_description=data.user_description,
                is_active=data.is_active,
                priority=len(rules) + 1,
            )
            await self.store.save_all(user_id, reindex([*rules, rule]))

        logger.info(
            "rule_created",
            user_id=user_id,
            rule_id=rule.id,
            priority=rule.priority,
            patterns_count=len(patterns),
        )
        return rule

    async def update_rule(self, user_id: str, rule_id: str, data: RuleUpdate) -> Rule:
        """Update patterns, category, notes or active flag. Priority is untouched."""
        update_data = data.model_dump(exclude_unset=True)
        for key in _NON_NULLABLE:
            if key in update_data and update_data[key] is None:
                del update_data[key]
        if "patterns" in update_data:
            update_data["patterns"] = normalize_patterns(update_data["patterns"])
        if "category_id" in update_data:
            update_data["category_id"] = validate_category_id(update_data["category_id"])

        async with self.locks.hold(user_id):
            rules = await self.list_rules(user_id)
            index = self._index_of(rules, rule_id)
            if "patterns" in update_data:
                others = [r for r in rules if r.id != rule_id]
                ensure_unique_patterns(update_data["patterns"], others)

            updated = rules[index].model_copy(update={**update_data, "updated_at": utcnow()})
            rules[index] = updated
            await self.store.save_all(user_id, rules)

        logger.info("rule_updated", user_id=user_id, rule_id=rule_id, fields=sorted(update_data))
        return updated

    async def delete_rule(self, user_id: str, rule_id: str) -> None:
        """Delete a rule and close the gap it leaves in the priorities."""
        async with self.locks.hold(user_id):
            rules = await self.list_rules(user_id)
            index = self._index_of(rules, rule_id)
            removed = rules.pop(index)
            await self.store.save_all(user_id, reindex(rules))

        logger.info("rule_deleted", user_id=user_id, rule_id=rule_id, priority=removed.priority)

    # ── Ordering ───────────────────────────────────────

    async def reorder_rules(self, user_id: str, rule_ids: list[str]) -> list[Rule]:
        """Set priorities from ``rule_ids``, which must list every rule once."""
        async with self.locks.hold(user_id):
            rules = await self.list_rules(user_id)
            by_id = {r.id: r for r in rules}

            for rule_id in rule_ids:
                if rule_id not in by_id:
                    raise NotFoundError(f"Rule {rule_id}")
            missing = [r.id for r in rules if r.id not in set(rule_ids)]
            if missing:
                raise NotFoundError(f"Position for rule {missing[0]}")
            if len(rule_ids) != len(set(rule_ids)):
                raise ValidationError("Invalid order: a rule is listed more than once")

            reordered = reindex([by_id[rule_id] for rule_id in rule_ids])
            await self.store.save_all(user_id, reordered)

        logger.info("rules_reordered", user_id=user_id, rules_count=len(reordered))
        return reordered

    async def move_rule_up(self, user_id: str, rule_id: str) -> list[Rule]:
        """Swap the rule with the one just above it (priority - 1)."""
        return await self._move(user_id, rule_id, -1)

    async def move_rule_down(self, user_id: str, rule_id: str) -> list[Rule]:
        """Swap the rule with the one just below it (priority + 1)."""
        return await self._move(user_id, rule_id, 1)

    # ── Helpers ─────────────────────────────────────────

    async def _move(self, user_id: str, rule_id: str, offset: int) -> list[Rule]:
        async with self.locks.hold(user_id):
            rules = await self.list_rules(user_id)
            index = self._index_of(rules, rule_id)
            if offset < 0 and index == 0:
                raise InvalidOperationError("Cannot move rule up: already at highest priority")
            if offset > 0 and index == len(rules) - 1:
                raise InvalidOperationError("Cannot move rule down: already at lowest priority")

            moved = reindex(swap_adjacent(rules, index, offset))
            await self.store.save_all(user_id, moved)

        logger.info("rule_moved", user_id=user_id, rule_id=rule_id, to_priority=index + offset + 1)
        return moved

    @staticmethod
    def _index_of(rules: list[Rule], rule_id: str) -> int:
        for index, rule in enumerate(rules):
            if rule.id == rule_id:
                return index
        raise NotFoundError("Rule")
