"""
Builds structured BattleLogEntry records for the battle log.

The orchestrator appends these to BattleState.battle_log with
add_log_entry(); the UI reads message and data.
"""

from __future__ import annotations

import secrets
import time
from typing import Callable, Iterable, Optional

from ..config import CombatConfig, DEFAULT_COMBAT_CONFIG
from ..state.combat import (
    AttackLogData,
    BattleLogEntry,
    Combatant,
    LogEntryType,
    SkillLogData,
)
from ..systems.skills import ActivatedSkill


def _now_ms() -> int:
    return int(time.time() * 1000)


class CombatLogger:
    """
    Args:
        config: Supplies the critical-damage threshold for attack entries
        clock: Returns the current time in ms; injectable for tests
    """

    def __init__(
        self,
        config: Optional[CombatConfig] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.config = config or DEFAULT_COMBAT_CONFIG
        self.clock = clock or _now_ms

    def _entry_id(self, timestamp: int) -> str:
        return f"log_{timestamp}_{secrets.token_hex(4)[:7]}"

    def _entry(self, entry_type: LogEntryType, message: str, data=None) -> BattleLogEntry:
        timestamp = self.clock()
        return BattleLogEntry(
            id=self._entry_id(timestamp),
            timestamp=timestamp,
            type=entry_type,
            message=message,
            data=data,
        )

    def log_attack(
        self,
        attacker: Combatant,
        defender: Combatant,
        damage: int,
        remaining_hp: int,
    ) -> BattleLogEntry:
        is_critical = damage > defender.max_hp * self.config.critical_damage_threshold
        return self._entry(
            LogEntryType.ATTACK,
            f"{attacker.name} attacks {defender.name} for {damage} damage!",
            AttackLogData(
                attacker_id=attacker.id,
                defender_id=defender.id,
                damage=damage,
                is_critical=is_critical,
                defender_remaining_hp=remaining_hp,
            ),
        )

    def log_skill(
        self,
        caster: Combatant,
        skill: ActivatedSkill,
        target_ids: Iterable[str] = (),
    ) -> BattleLogEntry:
        return self._entry(
            LogEntryType.SKILL,
            f"{caster.name} activates {skill.gem_name}!",
            SkillLogData(
                skill_id=skill.gem_id,
                skill_name=skill.gem_name,
                caster_id=caster.id,
                target_ids=tuple(target_ids),
                effects=(skill.skill_type.value,),
            ),
        )

    def log_victory(self, winner_name: str) -> BattleLogEntry:
        return self._entry(LogEntryType.VICTORY, f"{winner_name} wins the battle!")
