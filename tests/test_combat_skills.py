"""
Combat Skill Tests

knockback, retreat, double_attack and execute after an attack lands.
Combat gems are tried independently, so several may fire from one hit.
"""

from collections import namedtuple

import pytest

from arena_engine.state.gems import SkillType
from arena_engine.systems.skills import ActivatedSkill, SkillSystem


Hit = namedtuple("Hit", ["defender_new_hp", "defender_max_hp"])


def counting_source(value):
    calls = []

    def source():
        calls.append(value)
        return value

    source.calls = calls
    return source


class RecordingAttack:
    """perform_attack callback returning a fixed result and recording its calls."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    def __call__(self, attacker_gems, defender_gems):
        self.calls.append((attacker_gems, defender_gems))
        return self.result


@pytest.fixture
def system(always_roll):
    return SkillSystem(always_roll)


@pytest.fixture
def defender_gems(equip):
    return equip(card_id="defender")


def resolve(system, attacker_gems, defender_gems, hit, attacker_pos=3, defender_pos=4,
            perform_attack=None):
    return system.process_combat_skills(
        attacker_gems, defender_gems, attacker_pos, defender_pos, hit, perform_attack
    )


class TestNoSkill:

    def test_values_pass_through(self, system, empty_gems, defender_gems):
        result = resolve(system, empty_gems, defender_gems, Hit(60, 100))
        assert result.attacker_new_position == 3
        assert result.defender_new_position == 4
        assert result.defender_new_hp == 60
        assert result.additional_attacks == ()
        assert result.skills_activated == ()

    def test_movement_gems_ignored(self, make_gem, equip, defender_gems):
        source = counting_source(0.0)
        gems = equip(make_gem(SkillType.DOUBLE_MOVE), make_gem(SkillType.LEAP_STRIKE))
        result = resolve(SkillSystem(source), gems, defender_gems, Hit(60, 100))
        assert result.skills_activated == ()
        assert source.calls == []

    def test_cooldown_gem_not_rolled(self, make_gem, equip, defender_gems):
        source = counting_source(0.0)
        gems = equip(make_gem(SkillType.KNOCKBACK))
        gems = gems.with_gems([gems.equipped_gems[0].with_cooldown(2)])
        result = resolve(SkillSystem(source), gems, defender_gems, Hit(60, 100))
        assert result.defender_new_position == 4
        assert result.attacker_gems.cooldowns() == (2,)
        assert source.calls == []


class TestKnockback:

    @pytest.mark.parametrize("attacker_pos,defender_pos,expected", [
        (3, 4, 5),
        (5, 4, 3),
        (6, 7, 7),  # Pinned at the edge
    ])
    def test_pushes_defender_away(self, system, make_gem, equip, defender_gems,
                                  attacker_pos, defender_pos, expected):
        gems = equip(make_gem(SkillType.KNOCKBACK))
        result = resolve(system, gems, defender_gems, Hit(60, 100), attacker_pos, defender_pos)
        assert result.defender_new_position == expected
        assert result.attacker_new_position == attacker_pos

    def test_custom_distance(self, system, make_gem, equip, defender_gems):
        gems = equip(make_gem(SkillType.KNOCKBACK, knockbackDistance=3))
        result = resolve(system, gems, defender_gems, Hit(60, 100), 1, 2)
        assert result.defender_new_position == 5

    def test_failed_roll(self, make_gem, equip, defender_gems, never_roll):
        gems = equip(make_gem(SkillType.KNOCKBACK, activation_chance=50, cooldown=3))
        result = resolve(SkillSystem(never_roll), gems, defender_gems, Hit(60, 100))
        assert result.defender_new_position == 4
        assert result.attacker_gems.cooldowns() == (0,)


class TestRetreat:

    @pytest.mark.parametrize("attacker_pos,defender_pos,expected", [
        (3, 4, 2),
        (5, 4, 6),
        (0, 1, 0),  # Back against the wall
    ])
    def test_steps_away(self, system, make_gem, equip, defender_gems,
                        attacker_pos, defender_pos, expected):
        gems = equip(make_gem(SkillType.RETREAT))
        result = resolve(system, gems, defender_gems, Hit(60, 100), attacker_pos, defender_pos)
        assert result.attacker_new_position == expected
        assert result.defender_new_position == defender_pos

    def test_uses_knockback_distance_param(self, system, make_gem, equip, defender_gems):
        gems = equip(make_gem(SkillType.RETREAT, knockbackDistance=2))
        result = resolve(system, gems, defender_gems, Hit(60, 100), 4, 5)
        assert result.attacker_new_position == 2


class TestDoubleAttack:

    def test_second_attack(self, system, make_gem, equip, defender_gems):
        """The callback runs once and its HP becomes the new HP."""
        attacker_gems = equip(make_gem(SkillType.DOUBLE_ATTACK))
        second = Hit(30, 100)
        perform = RecordingAttack(second)
        result = resolve(system, attacker_gems, defender_gems, Hit(60, 100),
                         perform_attack=perform)
        assert perform.calls == [(attacker_gems, defender_gems)]
        assert result.additional_attacks == (second,)
        assert result.defender_new_hp == 30

    def test_ignores_attack_count(self, system, make_gem, equip, defender_gems):
        """Only one extra attack, whatever attackCount says."""
        perform = RecordingAttack(Hit(30, 100))
        gems = equip(make_gem(SkillType.DOUBLE_ATTACK, attackCount=3))
        resolve(system, gems, defender_gems, Hit(60, 100), perform_attack=perform)
        assert len(perform.calls) == 1

    def test_defender_down_still_activates(self, system, make_gem, equip, defender_gems):
        """No second attack on a defeated defender, but the cooldown is armed."""
        gem = make_gem(SkillType.DOUBLE_ATTACK, cooldown=4)
        perform = RecordingAttack(Hit(0, 100))
        result = resolve(system, equip(gem), defender_gems, Hit(0, 100), perform_attack=perform)
        assert perform.calls == []
        assert result.additional_attacks == ()
        assert result.skills_activated == (ActivatedSkill.from_gem(gem),)
        assert result.attacker_gems.cooldowns() == (4,)

    def test_no_callback_still_activates(self, system, make_gem, equip, defender_gems):
        gem = make_gem(SkillType.DOUBLE_ATTACK, cooldown=4)
        result = resolve(system, equip(gem), defender_gems, Hit(60, 100))
        assert result.additional_attacks == ()
        assert result.defender_new_hp == 60
        assert result.skills_activated == (ActivatedSkill.from_gem(gem),)
        assert result.attacker_gems.cooldowns() == (4,)


class TestExecute:

    def test_below_threshold_kills(self, system, make_gem, equip, defender_gems):
        """14/100 is under 15%."""
        gem = make_gem(SkillType.EXECUTE)
        result = resolve(system, equip(gem), defender_gems, Hit(14, 100))
        assert result.defender_new_hp == 0
        assert result.skills_activated == (ActivatedSkill.from_gem(gem),)

    def test_at_threshold_survives(self, system, make_gem, equip, defender_gems):
        """15/100 is not strictly under 15%."""
        gem = make_gem(SkillType.EXECUTE, cooldown=3)
        result = resolve(system, equip(gem), defender_gems, Hit(15, 100))
        assert result.defender_new_hp == 15
        assert result.skills_activated == ()
        # The roll succeeded, so the cooldown is armed anyway
        assert result.attacker_gems.cooldowns() == (3,)

    def test_custom_threshold(self, system, make_gem, equip, defender_gems):
        gems = equip(make_gem(SkillType.EXECUTE, executeThreshold=50))
        result = resolve(system, gems, defender_gems, Hit(40, 100))
        assert result.defender_new_hp == 0

    def test_dead_defender_not_executed(self, system, make_gem, equip, defender_gems):
        gems = equip(make_gem(SkillType.EXECUTE))
        result = resolve(system, gems, defender_gems, Hit(0, 100))
        assert result.defender_new_hp == 0
        assert result.skills_activated == ()

    def test_zero_max_hp_guarded(self, system, make_gem, equip, defender_gems):
        gems = equip(make_gem(SkillType.EXECUTE))
        result = resolve(system, gems, defender_gems, Hit(5, 0))
        assert result.defender_new_hp == 5
        assert result.skills_activated == ()

    def test_execute_after_double_attack(self, system, make_gem, equip, defender_gems):
        """Execute reads the HP left by an earlier double attack."""
        gems = equip(make_gem(SkillType.DOUBLE_ATTACK), make_gem(SkillType.EXECUTE))
        result = resolve(system, gems, defender_gems, Hit(40, 100),
                         perform_attack=RecordingAttack(Hit(10, 100)))
        assert result.defender_new_hp == 0
        assert [s.skill_type for s in result.skills_activated] == [
            SkillType.DOUBLE_ATTACK, SkillType.EXECUTE,
        ]


class TestMultipleSkills:

    def test_all_ready_gems_fire(self, system, make_gem, equip, defender_gems):
        """Knockback and retreat both resolve from one hit."""
        knockback = make_gem(SkillType.KNOCKBACK, cooldown=2)
        retreat = make_gem(SkillType.RETREAT, cooldown=3)
        result = resolve(system, equip(knockback, retreat), defender_gems, Hit(60, 100))
        assert result.defender_new_position == 5
        assert result.attacker_new_position == 2
        assert [s.gem_id for s in result.skills_activated] == [knockback.id, retreat.id]
        assert result.attacker_gems.cooldowns() == (2, 3)

    def test_input_gems_unchanged(self, system, make_gem, equip, defender_gems):
        gems = equip(make_gem(SkillType.KNOCKBACK, cooldown=2))
        resolve(system, gems, defender_gems, Hit(60, 100))
        assert gems.cooldowns() == (0,)
