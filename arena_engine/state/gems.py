"""
Gem definitions and per-battle gem state.

A Gem is authored outside the engine and is immutable during battle. The
only mutable battle state is each equipped gem's remaining cooldown, which
lives in EquippedGemState. Both EquippedGemState and BattleCardGems are
frozen: transitions return new values so one engine can drive many battles
at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

__all__ = [
    "SkillType",
    "SkillTrigger",
    "Gem",
    "EquippedGemState",
    "BattleCardGems",
    "MAX_GEM_SLOTS",
    "create_battle_card_gems",
]

MAX_GEM_SLOTS = 3


class SkillType(Enum):
    """Skills a gem can grant."""
    KNOCKBACK = "knockback"  # Push defender away after a hit
    RETREAT = "retreat"  # Step back from defender after a hit
    DOUBLE_MOVE = "double_move"  # Move 2 cells instead of 1
    DOUBLE_ATTACK = "double_attack"  # Strike again if defender survives
    EXECUTE = "execute"  # Finish a defender below an HP threshold
    LEAP_STRIKE = "leap_strike"  # Jump next to a nearby enemy and knock it back


class SkillTrigger(Enum):
    """Battle phase in which a gem may attempt to activate."""
    MOVEMENT = "movement"
    COMBAT = "combat"


@dataclass(frozen=True)
class Gem:
    """
    An equippable gem.

    effect_params is sparse: only the tunables relevant to skill_type are
    present, keyed by their authored names (knockbackDistance,
    moveDistance, attackCount, executeThreshold, leapRange, leapKnockback).
    Resolvers fall back to their own defaults for missing keys.
    """

    id: str
    name: str
    skill_type: SkillType
    trigger: SkillTrigger
    activation_chance: int  # 0-100
    cooldown: int = 0  # turns, 0-10
    description: str = ""
    effect_params: Mapping[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "skill_type", SkillType(self.skill_type))
        object.__setattr__(self, "trigger", SkillTrigger(self.trigger))
        object.__setattr__(
            self, "effect_params", MappingProxyType(dict(self.effect_params))
        )

    def param(self, name: str, default: Any) -> Any:
        value = self.effect_params.get(name)
        return default if value is None else value


@dataclass(frozen=True)
class EquippedGemState:
    """A gem slotted on a card, with its remaining cooldown (0 = ready)."""

    gem: Gem
    current_cooldown: int = 0

    @property
    def is_ready(self) -> bool:
        return self.current_cooldown == 0

    def with_cooldown(self, cooldown: int) -> EquippedGemState:
        return replace(self, current_cooldown=cooldown)


@dataclass(frozen=True)
class BattleCardGems:
    """All gem states for one card for the duration of one battle."""

    card_id: str
    equipped_gems: Tuple[EquippedGemState, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "equipped_gems", tuple(self.equipped_gems))

    def with_gems(self, equipped_gems: Iterable[EquippedGemState]) -> BattleCardGems:
        return replace(self, equipped_gems=tuple(equipped_gems))

    def cooldowns(self) -> Tuple[int, ...]:
        return tuple(state.current_cooldown for state in self.equipped_gems)


def create_battle_card_gems(card_id: str, gems: Iterable[Gem]) -> BattleCardGems:
    """
    Fresh battle state for a card: every gem equipped and ready.

    Raises:
        ValueError: if more than MAX_GEM_SLOTS gems are given
    """
    gems = list(gems)
    if len(gems) > MAX_GEM_SLOTS:
        raise ValueError(
            f"Card {card_id} has {len(gems)} gems; at most {MAX_GEM_SLOTS} can be equipped"
        )
    return BattleCardGems(
        card_id=card_id,
        equipped_gems=tuple(EquippedGemState(gem=g) for g in gems),
    )
