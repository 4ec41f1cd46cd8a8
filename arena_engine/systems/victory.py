"""
Victory System - decides whether a battle has ended.

Defeat is read from current_hp only; the advisory is_defeated flag on a
Combatant is never trusted. The challenger is checked first, so a double
knockout is a win for the opponent.
"""

from __future__ import annotations

from typing import Optional

from ..state.combat import BattleState, Combatant, CombatantRole, VictoryResult


def is_defeated(combatant: Combatant) -> bool:
    return combatant.is_dead


def check_victory(state: BattleState) -> Optional[VictoryResult]:
    """
    Returns:
        VictoryResult if either side is down, None if the battle continues
    """
    if is_defeated(state.challenger):
        return VictoryResult(
            winner=CombatantRole.OPPONENT,
            winner_name=state.opponent.name,
            total_turns=state.turn,
        )

    if is_defeated(state.opponent):
        return VictoryResult(
            winner=CombatantRole.CHALLENGER,
            winner_name=state.challenger.name,
            total_turns=state.turn,
        )

    return None
