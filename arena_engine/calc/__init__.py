"""
Calculation utilities for battle resolution.

Contains:
- Damage calculation (defense mitigation, crits, lifesteal)
- Stage scaling for enemy stats
"""

from .damage import (
    DamageCalculationInput,
    DamageResult,
    DamageCalculator,
    damage_calculator,
)

from .scaling import StageScaling, stage_scaling

__all__ = [
    "DamageCalculationInput",
    "DamageResult",
    "DamageCalculator",
    "damage_calculator",
    "StageScaling",
    "stage_scaling",
]
