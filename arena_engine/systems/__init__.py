"""
Battle systems.

- skills: gem cooldown state machine, movement and combat skills
- victory: battle-end detection
- turn: attacker alternation
- combat: single-attack resolution on combatants
"""

from .skills import (
    SkillAttackResult,
    ActivatedSkill,
    SkillActivationResult,
    MovementSkillResult,
    CombatSkillResult,
    SkillSystem,
    skill_system,
    MOVEMENT_SKILLS,
    COMBAT_SKILLS,
)
from .victory import is_defeated, check_victory
from .turn import get_next_attacker, advance_turn
from .combat import AttackResult, CombatSystem, attack_input
