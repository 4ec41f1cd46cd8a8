"""
Battle engine configuration.

Tunables are grouped per subsystem (combat formula, stage scaling, default
combatant stats) and bundled in BattleEngineConfig. All config objects are
frozen; use create_config() or dataclasses.replace() to derive variants.

Environment overrides (see load_config_from_env):
    ARENA_PRESET                     default | hard | easy
    ARENA_MIN_DAMAGE                 int
    ARENA_DEF_SCALING_FACTOR         float
    ARENA_CRITICAL_DAMAGE_THRESHOLD  float
    ARENA_USE_DEFENSE                true/false
    ARENA_MULTIPLIER_PER_STAGE       float
    ARENA_BASE_MULTIPLIER            float
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG TYPES
# =============================================================================

@dataclass(frozen=True)
class CombatConfig:
    """Damage formula tunables."""
    min_damage: int = 1  # Floor applied to every attack
    def_scaling_factor: float = 100  # DEF / (DEF + factor) diminishing returns knob
    critical_damage_threshold: float = 0.3  # Fraction of defender max HP for a "big hit"
    use_defense: bool = False  # Simple mode: damage = ATK x multiplier


@dataclass(frozen=True)
class StageScalingConfig:
    """Enemy stat growth per stage."""
    multiplier_per_stage: float = 0.1  # +10% per stage
    base_multiplier: float = 1.0  # Multiplier at stage 0


@dataclass(frozen=True)
class DefaultStatsConfig:
    """Stats used for any field a combatant is created without."""
    atk: int = 100
    defense: int = 50
    crit_rate: float = 0.05  # 5%
    crit_damage: float = 1.5  # x1.5
    armor_pen: int = 0  # percent
    lifesteal: int = 0  # percent


@dataclass(frozen=True)
class BattleEngineConfig:
    combat: CombatConfig = field(default_factory=CombatConfig)
    stage_scaling: StageScalingConfig = field(default_factory=StageScalingConfig)
    default_stats: DefaultStatsConfig = field(default_factory=DefaultStatsConfig)


# =============================================================================
# DEFAULTS AND PRESETS
# =============================================================================

DEFAULT_COMBAT_CONFIG = CombatConfig()
DEFAULT_STAGE_SCALING_CONFIG = StageScalingConfig()
DEFAULT_STATS_CONFIG = DefaultStatsConfig()

DEFAULT_BATTLE_CONFIG = BattleEngineConfig(
    combat=DEFAULT_COMBAT_CONFIG,
    stage_scaling=DEFAULT_STAGE_SCALING_CONFIG,
    default_stats=DEFAULT_STATS_CONFIG,
)

# Defense enabled, enemies grow 15% per stage
HARD_MODE_CONFIG = replace(
    DEFAULT_BATTLE_CONFIG,
    combat=replace(DEFAULT_COMBAT_CONFIG, use_defense=True),
    stage_scaling=replace(DEFAULT_STAGE_SCALING_CONFIG, multiplier_per_stage=0.15),
)

# Enemies grow 5% per stage
EASY_MODE_CONFIG = replace(
    DEFAULT_BATTLE_CONFIG,
    stage_scaling=replace(DEFAULT_STAGE_SCALING_CONFIG, multiplier_per_stage=0.05),
)

PRESETS: Dict[str, BattleEngineConfig] = {
    "default": DEFAULT_BATTLE_CONFIG,
    "hard": HARD_MODE_CONFIG,
    "easy": EASY_MODE_CONFIG,
}


# =============================================================================
# BUILDERS
# =============================================================================

def _merge(base: Any, overrides: Optional[Mapping[str, Any]]) -> Any:
    if not overrides:
        return base
    known = {f.name for f in fields(base)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(
            f"Unknown {type(base).__name__} keys: {', '.join(sorted(unknown))}"
        )
    return replace(base, **overrides)


def create_config(
    combat: Optional[Mapping[str, Any]] = None,
    stage_scaling: Optional[Mapping[str, Any]] = None,
    default_stats: Optional[Mapping[str, Any]] = None,
    base: BattleEngineConfig = DEFAULT_BATTLE_CONFIG,
) -> BattleEngineConfig:
    """
    Merge partial overrides onto a base config (defaults if not given).

    Example:
        config = create_config(combat={"use_defense": True})

    Raises:
        ValueError: if an override names a field the section does not have
    """
    return BattleEngineConfig(
        combat=_merge(base.combat, combat),
        stage_scaling=_merge(base.stage_scaling, stage_scaling),
        default_stats=_merge(base.default_stats, default_stats),
    )


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {raw!r}")


# env var -> (section, field, parser)
_ENV_FIELDS: Dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "ARENA_MIN_DAMAGE": ("combat", "min_damage", int),
    "ARENA_DEF_SCALING_FACTOR": ("combat", "def_scaling_factor", float),
    "ARENA_CRITICAL_DAMAGE_THRESHOLD": ("combat", "critical_damage_threshold", float),
    "ARENA_USE_DEFENSE": ("combat", "use_defense", _parse_bool),
    "ARENA_MULTIPLIER_PER_STAGE": ("stage_scaling", "multiplier_per_stage", float),
    "ARENA_BASE_MULTIPLIER": ("stage_scaling", "base_multiplier", float),
}


def load_config_from_env(env_file: Optional[str] = None) -> BattleEngineConfig:
    """
    Build a config from ARENA_* environment variables.

    A .env file is loaded first (python-dotenv); variables already set in
    the process environment win over the file.

    Args:
        env_file: Path to a .env file. None searches from the working directory.

    Raises:
        ValueError: on an unknown preset or an unparsable value
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    preset_name = os.environ.get("ARENA_PRESET", "default").strip().lower()
    if preset_name not in PRESETS:
        raise ValueError(
            f"ARENA_PRESET must be one of {', '.join(PRESETS)}; got {preset_name!r}"
        )

    overrides: Dict[str, Dict[str, Any]] = {"combat": {}, "stage_scaling": {}}
    for var, (section, name, parse) in _ENV_FIELDS.items():
        raw = os.environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            overrides[section][name] = parse(raw)
        except ValueError as e:
            raise ValueError(f"Invalid value for {var}: {raw!r}") from e

    config = create_config(base=PRESETS[preset_name], **overrides)
    logger.debug(f"Loaded battle config (preset={preset_name}): {config}")
    return config
