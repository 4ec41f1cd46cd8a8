"""
Combat System - resolves a single attack between two combatants.

Translates combatant stats into a DamageCalculationInput, runs the
detailed calculation, and produces updated copies of both combatants
(defender damaged, attacker healed by lifesteal up to max HP).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..calc.damage import DamageCalculationInput, DamageCalculator, DamageResult
from ..config import CombatConfig
from ..state.combat import Combatant
from ..state.rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttackResult:
    """
    Outcome of one attack.

    Carries defender_new_hp and defender_max_hp, so it can be handed to
    SkillSystem.process_combat_skills as-is.
    """
    attacker: Combatant  # Attacker after lifesteal
    defender: Combatant  # Defender after damage
    damage_result: DamageResult
    defender_new_hp: int
    attacker_new_hp: int
    is_critical: bool  # Big hit relative to defender max HP
    is_knockout: bool

    @property
    def damage(self) -> int:
        return self.damage_result.final_damage

    @property
    def lifesteal_heal(self) -> int:
        """Lifesteal rolled for this hit, before the max-HP cap."""
        return self.damage_result.lifesteal_amount

    @property
    def defender_max_hp(self) -> int:
        return self.defender.max_hp


def attack_input(attacker: Combatant, defender: Combatant) -> DamageCalculationInput:
    """Map combatant stats onto the calculator's percent conventions."""
    stats = attacker.base_stats
    return DamageCalculationInput(
        attacker_atk=stats.atk,
        defender_def=defender.base_stats.defense,
        armor_pen=stats.armor_pen,
        crit_chance=round(stats.crit_rate * 100, 6),
        crit_damage=round(stats.crit_damage * 100, 6),
        lifesteal=stats.lifesteal,
    )


class CombatSystem:

    def __init__(
        self,
        config: Optional[CombatConfig] = None,
        random_source: Optional[RandomSource] = None,
    ):
        self.calculator = DamageCalculator(config, random_source)

    @property
    def config(self) -> CombatConfig:
        return self.calculator.config

    def calculate_attack(self, attacker: Combatant, defender: Combatant) -> AttackResult:
        result = self.calculator.calculate_with_details(attack_input(attacker, defender))

        defender_new_hp = max(0, defender.current_hp - result.final_damage)
        attacker_new_hp = min(attacker.max_hp, attacker.current_hp + result.lifesteal_amount)
        is_knockout = defender_new_hp <= 0

        logger.debug(
            f"{attacker.name} hits {defender.name} for {result.final_damage}"
            f"{' (crit)' if result.is_crit else ''}: {defender.current_hp} -> {defender_new_hp}"
        )

        return AttackResult(
            attacker=replace(attacker, current_hp=attacker_new_hp),
            defender=replace(defender, current_hp=defender_new_hp, is_defeated=is_knockout),
            damage_result=result,
            defender_new_hp=defender_new_hp,
            attacker_new_hp=attacker_new_hp,
            is_critical=self.calculator.is_critical_damage(result.final_damage, defender.max_hp),
            is_knockout=is_knockout,
        )

    def apply_damage(self, combatant: Combatant, damage: int) -> Combatant:
        """Return a copy with HP reduced by damage, floored at 0."""
        new_hp = max(0, combatant.current_hp - damage)
        return replace(combatant, current_hp=new_hp, is_defeated=new_hp <= 0)
