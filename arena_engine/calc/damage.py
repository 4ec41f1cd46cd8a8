"""
Damage Calculator - Single source of truth for attack damage.

Design principles:
1. Pure functions - no side effects beyond the injected crit roll
2. Randomness is a dependency (RandomSource), never a global call
3. Integer results, floored, never below config.min_damage

Calculation order:
1. Raw damage = ATK x skill multiplier
2. Defense mitigation (only when config.use_defense and a DEF is given):
     effective_def = DEF x (1 - armor_pen/100)
     reduction     = effective_def / (effective_def + def_scaling_factor)
     damage        = raw x (1 - reduction)
3. Floor to int, minimum config.min_damage -> base damage
4. Crit roll; on crit, floor(base x crit_damage/100)
5. Lifesteal = floor(final x lifesteal/100)

Percent conventions: armor_pen, crit_chance, lifesteal are 0-100;
crit_damage is 100+ (150 = x1.5).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..config import CombatConfig, DEFAULT_COMBAT_CONFIG
from ..state.rng import RandomSource, default_random_source

__all__ = [
    "DamageCalculationInput",
    "DamageResult",
    "DamageCalculator",
    "damage_calculator",
]


# =============================================================================
# INPUT / RESULT
# =============================================================================

@dataclass(frozen=True)
class DamageCalculationInput:
    attacker_atk: int
    defender_def: Optional[int] = None  # None = no defense supplied
    skill_multiplier: float = 1.0
    armor_pen: int = 0  # 0-100
    crit_chance: float = 0  # 0-100
    crit_damage: float = 100  # 100+
    lifesteal: float = 0  # 0-100


@dataclass(frozen=True)
class DamageResult:
    """Damage breakdown for one attack."""
    final_damage: int  # After crit
    base_damage: int  # Before crit
    is_crit: bool
    crit_bonus: int  # final - base, 0 without crit
    lifesteal_amount: int  # HP returned to attacker


# =============================================================================
# CALCULATOR
# =============================================================================

class DamageCalculator:
    """
    Computes attack damage under a CombatConfig.

    Usage:
        calc = DamageCalculator(HARD_MODE_CONFIG.combat, random_source=SeededRandom(7))
        result = calc.calculate_with_details(
            DamageCalculationInput(attacker_atk=120, defender_def=40, crit_chance=25, crit_damage=150)
        )
    """

    def __init__(
        self,
        config: Optional[CombatConfig] = None,
        random_source: Optional[RandomSource] = None,
    ):
        self.config = config or DEFAULT_COMBAT_CONFIG
        self.random_source = random_source or default_random_source()

    def _uses_defense(self, data: DamageCalculationInput) -> bool:
        return self.config.use_defense and data.defender_def is not None

    def _base_damage(self, data: DamageCalculationInput) -> int:
        raw = data.attacker_atk * data.skill_multiplier
        if self._uses_defense(data):
            return self.calculate_with_def(raw, data.defender_def, data.armor_pen)
        return max(self.config.min_damage, math.floor(raw))

    def calculate(self, data: DamageCalculationInput) -> int:
        """
        Damage for an attack, ignoring crit and lifesteal.

        With defense disabled (or no DEF given) this is
        max(min_damage, floor(ATK x skill_multiplier)).
        """
        return self._base_damage(data)

    def calculate_effective_def(self, defense: float, armor_pen: float) -> float:
        """DEF left after armor penetration. Not floored."""
        return defense * (1 - armor_pen / 100)

    def calculate_with_def(self, atk: float, defense: float, armor_pen: float = 0) -> int:
        """
        Damage after defense mitigation.

        DEF 0 lets the full ATK through; as DEF grows the reduction tends to
        1 but min_damage still applies.

        Example (factor 100): ATK 100 vs DEF 100 -> 100 x (1 - 0.5) = 50
        """
        effective_def = self.calculate_effective_def(defense, armor_pen)
        denominator = effective_def + self.config.def_scaling_factor
        def_reduction = effective_def / denominator if denominator else 0.0
        damage = atk * (1 - def_reduction)
        return max(self.config.min_damage, math.floor(damage))

    def roll_critical(self, crit_chance: float) -> bool:
        """True with probability crit_chance/100."""
        return self.random_source() < crit_chance / 100

    def apply_critical(self, damage: int, crit_damage: float) -> int:
        """Apply a crit multiplier given as percent (150 = x1.5), floored."""
        return math.floor(damage * (crit_damage / 100))

    def is_critical_damage(self, damage: int, defender_max_hp: int) -> bool:
        """
        Whether a hit is "big" relative to the defender's max HP.

        Display classification only; independent of roll_critical.
        """
        return damage > defender_max_hp * self.config.critical_damage_threshold

    def calculate_with_details(self, data: DamageCalculationInput) -> DamageResult:
        """Full breakdown: base damage, crit roll, crit bonus, lifesteal."""
        base_damage = self._base_damage(data)

        is_crit = self.roll_critical(data.crit_chance)
        if is_crit:
            final_damage = self.apply_critical(base_damage, data.crit_damage)
            crit_bonus = final_damage - base_damage
        else:
            final_damage = base_damage
            crit_bonus = 0

        lifesteal_amount = math.floor(final_damage * data.lifesteal / 100)

        return DamageResult(
            final_damage=final_damage,
            base_damage=base_damage,
            is_crit=is_crit,
            crit_bonus=crit_bonus,
            lifesteal_amount=lifesteal_amount,
        )


# Default instance (default config, random.random)
damage_calculator = DamageCalculator()
