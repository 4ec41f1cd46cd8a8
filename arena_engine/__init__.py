"""
Gem Arena Battle Engine

Pure battle resolution for a gem-equipped card battler: two cards fight on
an 8-cell line, gems fire movement and combat skills, and damage follows
the configured defense/crit/lifesteal rules. All state is immutable; every
operation returns updated copies.

Core subsystems:
- state: random sources, arena geometry, gems, combatant/battle state
- calc: damage formulas, stage scaling
- systems: skills, combat, turn order, victory
- utils: battle message formatting, combat log entries

Usage:
    from arena_engine import SkillSystem, SeededRandom, create_battle_card_gems

    skills = SkillSystem(random_source=SeededRandom("ARENA1"))
    gems = create_battle_card_gems("card-1", [leap_gem])
    moved = skills.process_movement_skills(gems, 3, 4, 6)
    gems = moved.card_gems
"""

import logging

__version__ = "0.1.0"

# Configuration
from .config import (
    CombatConfig,
    StageScalingConfig,
    DefaultStatsConfig,
    BattleEngineConfig,
    DEFAULT_BATTLE_CONFIG,
    HARD_MODE_CONFIG,
    EASY_MODE_CONFIG,
    PRESETS,
    create_config,
    load_config_from_env,
)

# State
from .state import (
    RandomSource,
    XorShift128,
    SeededRandom,
    default_random_source,
    sequence_source,
    seed_to_long,
    CELL_COUNT,
    MIN_POSITION,
    MAX_POSITION,
    clamp_position,
    distance,
    is_adjacent,
    SkillType,
    SkillTrigger,
    Gem,
    EquippedGemState,
    BattleCardGems,
    MAX_GEM_SLOTS,
    create_battle_card_gems,
    CombatantRole,
    BattlePhase,
    LogEntryType,
    CombatantStats,
    Combatant,
    BattleLogEntry,
    VictoryResult,
    BattleState,
    create_combatant,
    create_initial_state,
)

# Calculation
from .calc import (
    DamageCalculationInput,
    DamageResult,
    DamageCalculator,
    damage_calculator,
    StageScaling,
    stage_scaling,
)

# Systems
from .systems import (
    ActivatedSkill,
    SkillActivationResult,
    MovementSkillResult,
    CombatSkillResult,
    SkillSystem,
    skill_system,
    AttackResult,
    CombatSystem,
    is_defeated,
    check_victory,
    get_next_attacker,
    advance_turn,
)

# Display
from .utils import MESSAGE_TEMPLATES, format_battle_message, CombatLogger


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
