"""Turn alternation between challenger and opponent."""

from __future__ import annotations

from dataclasses import replace

from ..state.combat import BattleState, CombatantRole, opposite_role


def get_next_attacker(current_attacker: CombatantRole) -> CombatantRole:
    return opposite_role(current_attacker)


def advance_turn(state: BattleState) -> BattleState:
    """Increment the turn counter and hand the attack to the other side."""
    return replace(
        state,
        turn=state.turn + 1,
        current_attacker=get_next_attacker(state.current_attacker),
    )
