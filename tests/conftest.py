"""
Shared pytest fixtures for the arena engine test suite.

This module provides reusable fixtures for:
- Deterministic random sources
- Gem factories and equipped gem state
- Combatants and battle state
"""

import os
import sys

import pytest

# Ensure project root is in path when running without an install
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from arena_engine.state.rng import SeededRandom, sequence_source
from arena_engine.state.gems import Gem, SkillType, SkillTrigger, create_battle_card_gems
from arena_engine.state.combat import create_combatant, create_initial_state


# =============================================================================
# Random Source Fixtures
# =============================================================================


@pytest.fixture
def always_roll():
    """Random source that always rolls 0.0: every chance > 0 succeeds."""
    return sequence_source([0.0])


@pytest.fixture
def never_roll():
    """Random source that always rolls just under 1.0: only 100% chances succeed."""
    return sequence_source([0.999999])


@pytest.fixture
def seeded_rng():
    """SeededRandom with a fixed string seed."""
    return SeededRandom("ARENA1")


# =============================================================================
# Gem Fixtures
# =============================================================================


_TRIGGERS = {
    SkillType.DOUBLE_MOVE: SkillTrigger.MOVEMENT,
    SkillType.LEAP_STRIKE: SkillTrigger.MOVEMENT,
    SkillType.KNOCKBACK: SkillTrigger.COMBAT,
    SkillType.RETREAT: SkillTrigger.COMBAT,
    SkillType.DOUBLE_ATTACK: SkillTrigger.COMBAT,
    SkillType.EXECUTE: SkillTrigger.COMBAT,
}


@pytest.fixture
def make_gem():
    """
    Factory for gems.

    Trigger defaults to the phase the skill type normally fires in.
    """
    counter = {"n": 0}

    def _make(skill_type, activation_chance=100, cooldown=2, trigger=None, **params):
        counter["n"] += 1
        return Gem(
            id=f"gem-{counter['n']}",
            name=f"{skill_type.value.replace('_', ' ').title()} Gem",
            skill_type=skill_type,
            trigger=trigger or _TRIGGERS[skill_type],
            activation_chance=activation_chance,
            cooldown=cooldown,
            effect_params=params,
        )

    return _make


@pytest.fixture
def equip():
    """Build a BattleCardGems for a card from a list of gems."""

    def _equip(*gems, card_id="card-1"):
        return create_battle_card_gems(card_id, gems)

    return _equip


@pytest.fixture
def empty_gems():
    """A card with no gems equipped."""
    return create_battle_card_gems("card-empty", [])


# =============================================================================
# Combatant / Battle Fixtures
# =============================================================================


@pytest.fixture
def ember_fox():
    """Challenger with no crit and no lifesteal."""
    return create_combatant(
        "fox", "Ember Fox", hp=500, atk=100, defense=50,
        crit_rate=0.0, crit_damage=1.5,
    )


@pytest.fixture
def stone_golem():
    """Opponent with high DEF."""
    return create_combatant(
        "golem", "Stone Golem", hp=800, atk=60, defense=100,
        crit_rate=0.0, crit_damage=1.5,
    )


@pytest.fixture
def battle_state(ember_fox, stone_golem):
    """Fresh battle between the fox and the golem."""
    return create_initial_state(ember_fox, stone_golem)
