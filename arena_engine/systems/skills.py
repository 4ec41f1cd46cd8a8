"""
Skill System - gem cooldowns, activation rolls, and skill effects.

Each equipped gem is a two-state machine:

    ON_COOLDOWN (current_cooldown > 0) --decrement_cooldowns--> ... --> READY
    READY --roll succeeds--> ON_COOLDOWN (gem.cooldown)
    READY --roll fails-----> READY (a failed roll costs nothing)

Skills resolve in two phases:
- Movement: gems with trigger=movement, tried in equip order. The first
  one that activates decides the move; later gems are not attempted.
- Combat: gems with trigger=combat, each tried independently after an
  attack lands. Several may fire from one attack.

Skill effects are registered per SkillType with @movement_skill /
@combat_skill. A gem whose skill type has no handler in the current phase
is not attempted in that phase.

Gem state is never mutated: results carry a new BattleCardGems with the
updated cooldowns, which the caller threads into the next call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from ..state.arena import clamp_position, direction_sign, distance
from ..state.gems import (
    BattleCardGems,
    EquippedGemState,
    Gem,
    SkillTrigger,
    SkillType,
)
from ..state.rng import RandomSource, default_random_source

logger = logging.getLogger(__name__)

__all__ = [
    "SkillAttackResult",
    "ActivatedSkill",
    "SkillActivationResult",
    "MovementSkillResult",
    "CombatSkillResult",
    "SkillSystem",
    "skill_system",
    "MOVEMENT_SKILLS",
    "COMBAT_SKILLS",
]

# Defaults for missing effect_params
DEFAULT_MOVE_DISTANCE = 2
DEFAULT_LEAP_RANGE = 2
DEFAULT_LEAP_KNOCKBACK = 2
DEFAULT_KNOCKBACK_DISTANCE = 1
DEFAULT_EXECUTE_THRESHOLD = 15  # percent of max HP


# =============================================================================
# RESULT TYPES
# =============================================================================

class SkillAttackResult(Protocol):
    """What the combat phase needs to know about an attack that landed."""

    @property
    def defender_new_hp(self) -> int: ...

    @property
    def defender_max_hp(self) -> int: ...


PerformAttack = Callable[[BattleCardGems, BattleCardGems], SkillAttackResult]


@dataclass(frozen=True)
class ActivatedSkill:
    skill_type: SkillType
    gem_id: str
    gem_name: str

    @classmethod
    def from_gem(cls, gem: Gem) -> ActivatedSkill:
        return cls(skill_type=gem.skill_type, gem_id=gem.id, gem_name=gem.name)


@dataclass(frozen=True)
class SkillActivationResult:
    activated: bool
    gem: Gem
    new_cooldown: int


@dataclass(frozen=True)
class MovementSkillResult:
    final_position: int
    skills_activated: Tuple[ActivatedSkill, ...]
    card_gems: BattleCardGems  # With post-roll cooldowns
    enemy_new_position: Optional[int] = None  # Set by leap_strike


@dataclass(frozen=True)
class CombatSkillResult:
    attacker_new_position: int
    defender_new_position: int
    defender_new_hp: int
    additional_attacks: Tuple[SkillAttackResult, ...]
    skills_activated: Tuple[ActivatedSkill, ...]
    attacker_gems: BattleCardGems  # With post-roll cooldowns


# =============================================================================
# PHASE CONTEXTS
# =============================================================================

@dataclass
class MovementContext:
    """Working state for one movement phase."""
    current_position: int
    normal_target_position: int
    enemy_position: int
    final_position: int
    enemy_new_position: Optional[int] = None

    @property
    def move_direction(self) -> int:
        return direction_sign(self.current_position, self.normal_target_position)


@dataclass
class CombatContext:
    """Working state for one combat phase."""
    attacker_gems: BattleCardGems
    defender_gems: BattleCardGems
    attacker_position: int
    defender_position: int
    defender_max_hp: int
    perform_attack: Optional[PerformAttack]
    attacker_new_position: int
    defender_new_position: int
    defender_new_hp: int
    additional_attacks: List[SkillAttackResult] = field(default_factory=list)


# =============================================================================
# SKILL REGISTRY
# =============================================================================

@dataclass(frozen=True)
class SkillHandler:
    """
    resolve: applies the effect; returns True if the skill should be
        reported as activated.
    precondition: checked before the activation roll; a gem whose
        precondition fails is not attempted and keeps its cooldown.
    """
    resolve: Callable
    precondition: Optional[Callable] = None


MOVEMENT_SKILLS: Dict[SkillType, SkillHandler] = {}
COMBAT_SKILLS: Dict[SkillType, SkillHandler] = {}


def movement_skill(skill_type: SkillType, precondition: Optional[Callable] = None):
    """
    Register a movement-phase skill.

    Usage:
        @movement_skill(SkillType.DOUBLE_MOVE)
        def double_move(ctx: MovementContext, gem: Gem) -> bool:
            ...
    """
    def decorator(func: Callable[[MovementContext, Gem], bool]) -> Callable:
        MOVEMENT_SKILLS[skill_type] = SkillHandler(resolve=func, precondition=precondition)
        return func
    return decorator


def combat_skill(skill_type: SkillType):
    """Register a combat-phase skill."""
    def decorator(func: Callable[[CombatContext, Gem], bool]) -> Callable:
        COMBAT_SKILLS[skill_type] = SkillHandler(resolve=func)
        return func
    return decorator


# -----------------------------------------------------------------------------
# Movement skills
# -----------------------------------------------------------------------------

@movement_skill(SkillType.DOUBLE_MOVE)
def _double_move(ctx: MovementContext, gem: Gem) -> bool:
    move_distance = gem.param("moveDistance", DEFAULT_MOVE_DISTANCE)
    ctx.final_position = clamp_position(
        ctx.current_position + ctx.move_direction * move_distance
    )
    return True


def _enemy_in_leap_range(ctx: MovementContext, gem: Gem) -> bool:
    leap_range = gem.param("leapRange", DEFAULT_LEAP_RANGE)
    # Same cell never qualifies
    return 1 <= distance(ctx.current_position, ctx.enemy_position) <= leap_range


@movement_skill(SkillType.LEAP_STRIKE, precondition=_enemy_in_leap_range)
def _leap_strike(ctx: MovementContext, gem: Gem) -> bool:
    leap_knockback = gem.param("leapKnockback", DEFAULT_LEAP_KNOCKBACK)

    # Land next to the enemy on the approach side
    approach = direction_sign(ctx.current_position, ctx.enemy_position)
    ctx.final_position = clamp_position(ctx.enemy_position - approach)

    # Knock the enemy away from where we landed
    push = direction_sign(ctx.final_position, ctx.enemy_position)
    ctx.enemy_new_position = clamp_position(ctx.enemy_position + push * leap_knockback)
    return True


# -----------------------------------------------------------------------------
# Combat skills
# -----------------------------------------------------------------------------

@combat_skill(SkillType.KNOCKBACK)
def _knockback(ctx: CombatContext, gem: Gem) -> bool:
    knockback_distance = gem.param("knockbackDistance", DEFAULT_KNOCKBACK_DISTANCE)
    push = direction_sign(ctx.attacker_position, ctx.defender_position)
    ctx.defender_new_position = clamp_position(
        ctx.defender_position + push * knockback_distance
    )
    return True


@combat_skill(SkillType.RETREAT)
def _retreat(ctx: CombatContext, gem: Gem) -> bool:
    # Shares the knockbackDistance param with knockback
    retreat_distance = gem.param("knockbackDistance", DEFAULT_KNOCKBACK_DISTANCE)
    away = direction_sign(ctx.defender_position, ctx.attacker_position)
    ctx.attacker_new_position = clamp_position(
        ctx.attacker_position + away * retreat_distance
    )
    return True


@combat_skill(SkillType.DOUBLE_ATTACK)
def _double_attack(ctx: CombatContext, gem: Gem) -> bool:
    # Reported as activated (cooldown armed) even when no second attack happens
    if ctx.defender_new_hp <= 0:
        logger.debug(f"{gem.name}: defender already down, no second attack")
        return True
    if ctx.perform_attack is None:
        logger.debug(f"{gem.name}: no attack callback, no second attack")
        return True

    second = ctx.perform_attack(ctx.attacker_gems, ctx.defender_gems)
    ctx.additional_attacks.append(second)
    ctx.defender_new_hp = second.defender_new_hp
    return True


@combat_skill(SkillType.EXECUTE)
def _execute(ctx: CombatContext, gem: Gem) -> bool:
    # Cooldown is armed by the roll even when nothing is executed
    if ctx.defender_new_hp <= 0:
        logger.debug(f"{gem.name}: defender already down, execute suppressed")
        return False
    if ctx.defender_max_hp <= 0:
        return False

    threshold = gem.param("executeThreshold", DEFAULT_EXECUTE_THRESHOLD)
    hp_percentage = ctx.defender_new_hp / ctx.defender_max_hp * 100
    if hp_percentage < threshold:
        ctx.defender_new_hp = 0
        return True
    return False


# =============================================================================
# SKILL SYSTEM
# =============================================================================

class SkillSystem:
    """
    Gem activation and skill resolution.

    Args:
        random_source: uniform [0, 1) source for activation rolls
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        self.random_source = random_source or default_random_source()

    # -------------------------------------------------------------------------
    # Cooldown state machine
    # -------------------------------------------------------------------------

    def roll_activation(self, chance: float) -> bool:
        """Roll a 0-100 activation chance; out-of-range chances are clamped."""
        clamped = max(0, min(100, chance))
        return self.random_source() * 100 < clamped

    def can_activate(self, gem_state: EquippedGemState) -> bool:
        return gem_state.is_ready

    def try_activate_skill(self, gem_state: EquippedGemState) -> SkillActivationResult:
        """
        Attempt to activate a gem.

        - On cooldown: not rolled, cooldown unchanged.
        - Roll fails: cooldown stays 0, the gem can retry next trigger.
        - Roll succeeds: cooldown re-armed to gem.cooldown.
        """
        gem = gem_state.gem

        if not self.can_activate(gem_state):
            return SkillActivationResult(
                activated=False, gem=gem, new_cooldown=gem_state.current_cooldown
            )

        if not self.roll_activation(gem.activation_chance):
            logger.debug(f"Gem {gem.name} ({gem.skill_type.value}) failed its roll")
            return SkillActivationResult(activated=False, gem=gem, new_cooldown=0)

        logger.debug(
            f"Gem {gem.name} ({gem.skill_type.value}) activated, cooldown {gem.cooldown}"
        )
        return SkillActivationResult(activated=True, gem=gem, new_cooldown=gem.cooldown)

    def decrement_cooldowns(self, card_gems: BattleCardGems) -> BattleCardGems:
        """Turn-end tick: every cooldown drops by 1, floored at 0."""
        return card_gems.with_gems(
            state.with_cooldown(max(0, state.current_cooldown - 1))
            for state in card_gems.equipped_gems
        )

    # -------------------------------------------------------------------------
    # Movement phase
    # -------------------------------------------------------------------------

    def process_movement_skills(
        self,
        card_gems: BattleCardGems,
        current_position: int,
        normal_target_position: int,
        enemy_position: int,
    ) -> MovementSkillResult:
        """
        Resolve at most one movement skill for a card about to move.

        Args:
            card_gems: The moving card's gems
            current_position: Where the card stands now
            normal_target_position: Where a plain move would take it
            enemy_position: Where the enemy card stands

        Returns:
            MovementSkillResult. Without an activation, final_position is
            normal_target_position and enemy_new_position is None.
        """
        ctx = MovementContext(
            current_position=current_position,
            normal_target_position=normal_target_position,
            enemy_position=enemy_position,
            final_position=normal_target_position,
        )
        skills_activated: List[ActivatedSkill] = []
        updated: List[EquippedGemState] = []

        for gem_state in card_gems.equipped_gems:
            gem = gem_state.gem
            handler = MOVEMENT_SKILLS.get(gem.skill_type)

            if (
                skills_activated
                or gem.trigger != SkillTrigger.MOVEMENT
                or handler is None
                or not self.can_activate(gem_state)
                or (handler.precondition and not handler.precondition(ctx, gem))
            ):
                updated.append(gem_state)
                continue

            activation = self.try_activate_skill(gem_state)
            updated.append(gem_state.with_cooldown(activation.new_cooldown))

            if activation.activated and handler.resolve(ctx, gem):
                skills_activated.append(ActivatedSkill.from_gem(gem))

        return MovementSkillResult(
            final_position=ctx.final_position,
            skills_activated=tuple(skills_activated),
            card_gems=card_gems.with_gems(updated),
            enemy_new_position=ctx.enemy_new_position,
        )

    # -------------------------------------------------------------------------
    # Combat phase
    # -------------------------------------------------------------------------

    def process_combat_skills(
        self,
        attacker_gems: BattleCardGems,
        defender_gems: BattleCardGems,
        attacker_position: int,
        defender_position: int,
        attack_result: SkillAttackResult,
        perform_attack: Optional[PerformAttack] = None,
    ) -> CombatSkillResult:
        """
        Resolve the attacker's combat skills after an attack lands.

        Args:
            attacker_gems: The attacking card's gems (rolled and updated)
            defender_gems: The defending card's gems (passed to perform_attack only)
            attacker_position: Attacker's cell
            defender_position: Defender's cell
            attack_result: The attack that just landed
            perform_attack: Callback for double_attack's extra strike

        Returns:
            CombatSkillResult. Positions and HP keep their pre-skill values
            unless a skill changed them.
        """
        ctx = CombatContext(
            attacker_gems=attacker_gems,
            defender_gems=defender_gems,
            attacker_position=attacker_position,
            defender_position=defender_position,
            defender_max_hp=attack_result.defender_max_hp,
            perform_attack=perform_attack,
            attacker_new_position=attacker_position,
            defender_new_position=defender_position,
            defender_new_hp=attack_result.defender_new_hp,
        )
        skills_activated: List[ActivatedSkill] = []
        updated: List[EquippedGemState] = []

        for gem_state in attacker_gems.equipped_gems:
            gem = gem_state.gem
            handler = COMBAT_SKILLS.get(gem.skill_type)

            if (
                gem.trigger != SkillTrigger.COMBAT
                or handler is None
                or not self.can_activate(gem_state)
            ):
                updated.append(gem_state)
                continue

            activation = self.try_activate_skill(gem_state)
            updated.append(gem_state.with_cooldown(activation.new_cooldown))

            if activation.activated and handler.resolve(ctx, gem):
                skills_activated.append(ActivatedSkill.from_gem(gem))

        return CombatSkillResult(
            attacker_new_position=ctx.attacker_new_position,
            defender_new_position=ctx.defender_new_position,
            defender_new_hp=ctx.defender_new_hp,
            additional_attacks=tuple(ctx.additional_attacks),
            skills_activated=tuple(skills_activated),
            attacker_gems=attacker_gems.with_gems(updated),
        )


skill_system = SkillSystem()
