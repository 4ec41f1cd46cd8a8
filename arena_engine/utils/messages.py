"""
Combat log lines for display.

Template choice depends only on (is_crit, lifesteal_amount > 0). Nothing
in the engine reads these strings back.
"""

from __future__ import annotations

from typing import Dict

from ..calc.damage import DamageResult

# Placeholders: {attacker}, {defender}, {damage}, {crit_bonus}, {heal_amount}
MESSAGE_TEMPLATES: Dict[str, str] = {
    "attack": "{attacker} deals {damage} damage to {defender}",
    "attack_with_crit": "{attacker} deals {damage} damage to {defender} (CRIT! +{crit_bonus})",
    "attack_with_lifesteal": "{attacker} deals {damage} damage to {defender}, heals {heal_amount} HP",
    "attack_with_crit_and_lifesteal": (
        "{attacker} deals {damage} damage to {defender} (CRIT! +{crit_bonus}), heals {heal_amount} HP"
    ),
}


def select_template(damage_result: DamageResult) -> str:
    heals = damage_result.lifesteal_amount > 0
    if damage_result.is_crit and heals:
        return MESSAGE_TEMPLATES["attack_with_crit_and_lifesteal"]
    if damage_result.is_crit:
        return MESSAGE_TEMPLATES["attack_with_crit"]
    if heals:
        return MESSAGE_TEMPLATES["attack_with_lifesteal"]
    return MESSAGE_TEMPLATES["attack"]


def format_battle_message(attacker: str, defender: str, damage_result: DamageResult) -> str:
    """
    e.g. "Ember Fox deals 45 damage to Stone Golem (CRIT! +15), heals 9 HP"
    """
    return select_template(damage_result).format(
        attacker=attacker,
        defender=defender,
        damage=damage_result.final_damage,
        crit_bonus=damage_result.crit_bonus,
        heal_amount=damage_result.lifesteal_amount,
    )
