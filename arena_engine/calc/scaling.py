"""
Stage scaling for enemy stats.

    multiplier = base_multiplier + stage x multiplier_per_stage
    atk, defense -> floor(stat x multiplier)

Crit rate and crit damage are already ratios and pass through unscaled,
as do armor penetration and lifesteal percentages.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Optional

from ..config import StageScalingConfig, DEFAULT_STAGE_SCALING_CONFIG
from ..state.combat import CombatantStats


class StageScaling:

    def __init__(self, config: Optional[StageScalingConfig] = None):
        self.config = config or DEFAULT_STAGE_SCALING_CONFIG

    def get_multiplier(self, stage_number: int) -> float:
        return self.config.base_multiplier + stage_number * self.config.multiplier_per_stage

    def scale_stats(self, base_stats: CombatantStats, stage_number: int) -> CombatantStats:
        """Return a new stat block for ``stage_number``; the input is unchanged."""
        multiplier = self.get_multiplier(stage_number)
        return replace(
            base_stats,
            atk=math.floor(base_stats.atk * multiplier),
            defense=math.floor(base_stats.defense * multiplier),
        )


stage_scaling = StageScaling()
