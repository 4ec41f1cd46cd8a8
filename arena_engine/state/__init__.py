"""
State for battle resolution.

Contains:
- Random sources (injectable, seeded XorShift128)
- Arena geometry (8-cell line)
- Gem definitions and per-battle cooldown state
- Combatant and battle state value types
"""

from .rng import (
    RandomSource,
    XorShift128,
    SeededRandom,
    default_random_source,
    sequence_source,
    seed_to_long,
)
from .arena import (
    CELL_COUNT,
    MIN_POSITION,
    MAX_POSITION,
    ADJACENT_DISTANCE,
    clamp_position,
    direction_sign,
    distance,
    is_adjacent,
)
from .gems import (
    SkillType,
    SkillTrigger,
    Gem,
    EquippedGemState,
    BattleCardGems,
    MAX_GEM_SLOTS,
    create_battle_card_gems,
)
from .combat import (
    CombatantRole,
    BattlePhase,
    LogEntryType,
    CombatantStats,
    Combatant,
    AttackLogData,
    SkillLogData,
    BattleLogEntry,
    VictoryResult,
    BattleState,
    create_combatant,
    create_initial_state,
    opposite_role,
    get_combatant,
    update_combatant,
    set_phase,
    add_log_entry,
    set_result,
    toggle_auto_battle,
    apply_damage,
)
