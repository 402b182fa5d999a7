"""Tests for the daily goal calculator."""

import pytest

from fitness_tracker.domain.goals import DailyGoalTargets
from fitness_tracker.domain.profile import Gender
from fitness_tracker.services.goals import compute_daily_goals, round_half_up


def test_maintain_goal_for_lightly_active_male() -> None:
    targets = compute_daily_goals(
        age=25,
        gender=Gender.MALE,
        height_cm=175,
        weight_kg=70.5,
        activity_level_id=2,
        goal_id=2,
    )

    assert targets == DailyGoalTargets(
        calories=2308, protein_g=127, fat_g=77, carbs_g=277
    )


def test_gain_goal_adds_surplus() -> None:
    targets = compute_daily_goals(
        age=30,
        gender="female",
        height_cm=165,
        weight_kg=60,
        activity_level_id=3,
        goal_id=3,
    )

    assert targets == DailyGoalTargets(
        calories=2546, protein_g=108, fat_g=85, carbs_g=338
    )


def test_is_deterministic() -> None:
    kwargs = {
        "age": 41,
        "gender": Gender.OTHER,
        "height_cm": 181.5,
        "weight_kg": 88.2,
        "activity_level_id": 4,
        "goal_id": 1,
    }

    assert compute_daily_goals(**kwargs) == compute_daily_goals(**kwargs)


@pytest.mark.parametrize(
    ("gender", "expected"),
    [
        (
            Gender.FEMALE,
            DailyGoalTargets(calories=1200, protein_g=72, fat_g=40, carbs_g=138),
        ),
        (
            Gender.MALE,
            DailyGoalTargets(calories=1500, protein_g=72, fat_g=50, carbs_g=191),
        ),
        (
            Gender.OTHER,
            DailyGoalTargets(calories=1350, protein_g=72, fat_g=45, carbs_g=164),
        ),
    ],
)
def test_calorie_floor_by_gender(gender: Gender, expected: DailyGoalTargets) -> None:
    targets = compute_daily_goals(
        age=60,
        gender=gender,
        height_cm=150,
        weight_kg=40,
        activity_level_id=1,
        goal_id=1,
    )

    assert targets == expected


def test_unknown_activity_level_uses_sedentary_multiplier() -> None:
    base = {
        "age": 35,
        "gender": Gender.FEMALE,
        "height_cm": 170,
        "weight_kg": 65,
        "goal_id": 2,
    }

    assert compute_daily_goals(activity_level_id=99, **base) == compute_daily_goals(
        activity_level_id=1, **base
    )


def test_extreme_inputs_leave_carbs_negative() -> None:
    targets = compute_daily_goals(
        age=120,
        gender=Gender.FEMALE,
        height_cm=50,
        weight_kg=500,
        activity_level_id=1,
        goal_id=1,
    )

    assert targets.protein_g == 900
    assert targets.carbs_g < 0


def test_round_half_up() -> None:
    assert round_half_up(190.5) == 191
    assert round_half_up(2.5) == 3
    assert round_half_up(76.94) == 77
    assert round_half_up(126.49) == 126
