"""
Battle state value types and copy-returning transition helpers.

The orchestrator owns a BattleState and replaces it turn by turn; the
engine systems only read it or receive fields derived from it. Every
helper here returns a new value and leaves its input untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional, Tuple, Union

from ..config import DEFAULT_STATS_CONFIG, DefaultStatsConfig


# =============================================================================
# Enums
# =============================================================================


class CombatantRole(Enum):
    """Which side of the battle a combatant is on."""

    CHALLENGER = "challenger"  # The player's card
    OPPONENT = "opponent"  # The enemy card


class BattlePhase(Enum):
    SETUP = "setup"
    READY = "ready"
    FIGHTING = "fighting"
    FINISHED = "finished"


class LogEntryType(Enum):
    ATTACK = "attack"
    DAMAGE = "damage"
    SKILL = "skill"
    BUFF = "buff"
    VICTORY = "victory"


# =============================================================================
# Combatants
# =============================================================================


@dataclass(frozen=True)
class CombatantStats:
    """Base offensive/defensive profile."""

    atk: int
    defense: int
    crit_rate: float = 0.0  # 0.0-1.0
    crit_damage: float = 1.0  # multiplier, >= 1.0
    armor_pen: int = 0  # percent of defender DEF ignored
    lifesteal: int = 0  # percent of damage dealt healed


@dataclass(frozen=True)
class Combatant:
    """
    A card in battle.

    ``is_defeated`` is advisory only; victory checks read ``current_hp``.
    """

    id: str
    name: str
    base_stats: CombatantStats
    current_hp: int
    max_hp: int
    image_url: Optional[str] = None
    buffs: Tuple[Any, ...] = ()
    is_defeated: bool = False
    effective_range: int = 1

    @property
    def is_dead(self) -> bool:
        return self.current_hp <= 0


def create_combatant(
    id: str,
    name: str,
    hp: int,
    atk: Optional[int] = None,
    defense: Optional[int] = None,
    crit_rate: Optional[float] = None,
    crit_damage: Optional[float] = None,
    armor_pen: Optional[int] = None,
    lifesteal: Optional[int] = None,
    image_url: Optional[str] = None,
    effective_range: int = 1,
    stats_config: DefaultStatsConfig = DEFAULT_STATS_CONFIG,
) -> Combatant:
    """Create a full-HP combatant, filling omitted stats from ``stats_config``."""

    def pick(value, default):
        return default if value is None else value

    stats = CombatantStats(
        atk=pick(atk, stats_config.atk),
        defense=pick(defense, stats_config.defense),
        crit_rate=pick(crit_rate, stats_config.crit_rate),
        crit_damage=pick(crit_damage, stats_config.crit_damage),
        armor_pen=pick(armor_pen, stats_config.armor_pen),
        lifesteal=pick(lifesteal, stats_config.lifesteal),
    )
    return Combatant(
        id=id,
        name=name,
        base_stats=stats,
        current_hp=hp,
        max_hp=hp,
        image_url=image_url,
        effective_range=effective_range,
    )


# =============================================================================
# Battle log
# =============================================================================


@dataclass(frozen=True)
class AttackLogData:
    attacker_id: str
    defender_id: str
    damage: int
    is_critical: bool
    defender_remaining_hp: int


@dataclass(frozen=True)
class SkillLogData:
    skill_id: str
    skill_name: str
    caster_id: str
    target_ids: Tuple[str, ...] = ()
    effects: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BattleLogEntry:
    id: str
    timestamp: int  # ms since epoch
    type: LogEntryType
    message: str
    data: Optional[Union[AttackLogData, SkillLogData]] = None


# =============================================================================
# Battle state
# =============================================================================


@dataclass(frozen=True)
class VictoryResult:
    winner: CombatantRole
    winner_name: str
    total_turns: int


@dataclass(frozen=True)
class BattleState:
    challenger: Combatant
    opponent: Combatant
    phase: BattlePhase = BattlePhase.READY
    turn: int = 1
    current_attacker: CombatantRole = CombatantRole.CHALLENGER
    battle_log: Tuple[BattleLogEntry, ...] = ()
    result: Optional[VictoryResult] = None
    is_auto_battle: bool = False


def opposite_role(role: CombatantRole) -> CombatantRole:
    if role == CombatantRole.CHALLENGER:
        return CombatantRole.OPPONENT
    return CombatantRole.CHALLENGER


def create_initial_state(challenger: Combatant, opponent: Combatant) -> BattleState:
    """New battle in READY phase, turn 1, challenger attacking first."""
    return BattleState(challenger=challenger, opponent=opponent)


def get_combatant(state: BattleState, role: CombatantRole) -> Combatant:
    if role == CombatantRole.CHALLENGER:
        return state.challenger
    return state.opponent


def update_combatant(state: BattleState, role: CombatantRole, **changes) -> BattleState:
    """Replace fields on one side's combatant."""
    updated = replace(get_combatant(state, role), **changes)
    if role == CombatantRole.CHALLENGER:
        return replace(state, challenger=updated)
    return replace(state, opponent=updated)


def set_phase(state: BattleState, phase: BattlePhase) -> BattleState:
    return replace(state, phase=phase)


def add_log_entry(state: BattleState, entry: BattleLogEntry) -> BattleState:
    return replace(state, battle_log=state.battle_log + (entry,))


def set_result(state: BattleState, result: VictoryResult) -> BattleState:
    """Record the result; a battle with a result is always FINISHED."""
    return replace(state, result=result, phase=BattlePhase.FINISHED)


def toggle_auto_battle(state: BattleState) -> BattleState:
    return replace(state, is_auto_battle=not state.is_auto_battle)


def apply_damage(state: BattleState, role: CombatantRole, damage: int) -> BattleState:
    """Subtract damage from one side, flooring HP at 0."""
    new_hp = max(0, get_combatant(state, role).current_hp - damage)
    return update_combatant(state, role, current_hp=new_hp, is_defeated=new_hp <= 0)
