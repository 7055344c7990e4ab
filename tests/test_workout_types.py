from typing import get_args

import pytest

from workout_types import (
    EQUIPMENT_OPTIONS,
    FITNESS_LEVELS,
    GENDERS,
    INTENSITY_LEVELS,
    PREFERENCE_MODES,
    TECHNIQUE_OPTIONS,
    WORKOUT_GOALS,
    Equipment,
    FitnessLevel,
    Gender,
    Intensity,
    PreferenceMode,
    Technique,
    WorkoutGoal,
    ProfileValidationError,
    add_favorite_exercise,
    coerce_plan,
    default_user_profile,
    profile_range_errors,
    remove_favorite_exercise,
    toggle_equipment,
    toggle_technique,
    validate_profile,
)


@pytest.mark.parametrize(
    "current, tag, expected",
    [
        (["dumbbells", "barbell"], "full_gym", ["full_gym"]),
        (["full_gym"], "dumbbells", ["dumbbells"]),
        (["dumbbells"], "barbell", ["dumbbells", "barbell"]),
        (["dumbbells", "barbell"], "barbell", ["dumbbells"]),
        (["dumbbells"], "dumbbells", ["bodyweight"]),
        (["full_gym"], "full_gym", ["full_gym"]),
        ([], "kettlebell", ["kettlebell"]),
    ],
)
def test_toggle_equipment(current, tag, expected):
    assert toggle_equipment(current, tag) == expected


def test_toggle_equipment_never_mixes_full_gym():
    selection = ["bodyweight"]
    for tag in ["dumbbells", "full_gym", "barbell", "barbell", "full_gym", "jump_rope"]:
        selection = toggle_equipment(selection, tag)
        assert selection
        assert "full_gym" not in selection or selection == ["full_gym"]


def test_toggle_technique():
    assert toggle_technique([], "hiit") == ["hiit"]
    assert toggle_technique(["hiit", "supersets"], "hiit") == ["supersets"]


def test_favorites():
    favs = add_favorite_exercise([], "  Squat ")
    assert favs == ["Squat"]
    assert add_favorite_exercise(favs, "Squat") == ["Squat"]
    assert add_favorite_exercise(favs, "   ") == ["Squat"]
    assert remove_favorite_exercise(["Squat", "Deadlift"], "Squat") == ["Deadlift"]


def test_default_profile_is_valid():
    validate_profile(default_user_profile())
    assert profile_range_errors(default_user_profile()) == []


def test_validate_profile_rejects_unknown_enum(sample_profile):
    sample_profile["goal"] = "get_huge"
    with pytest.raises(ProfileValidationError, match="goal"):
        validate_profile(sample_profile)


def test_validate_profile_requires_equipment(sample_profile):
    sample_profile["equipment"] = []
    with pytest.raises(ProfileValidationError, match="equipment"):
        validate_profile(sample_profile)


def test_validate_profile_requires_mode_fields(sample_profile):
    sample_profile["workoutPreferenceMode"] = "total_hours"
    with pytest.raises(ProfileValidationError, match="totalHoursPerWeek"):
        validate_profile(sample_profile)

    sample_profile["totalHoursPerWeek"] = 4.5
    validate_profile(sample_profile)


def test_validate_profile_rejects_bool_numbers(sample_profile):
    sample_profile["age"] = True
    with pytest.raises(ProfileValidationError):
        validate_profile(sample_profile)


def test_profile_range_errors(sample_profile):
    sample_profile["age"] = 12
    sample_profile["timePerSession"] = None
    errors = profile_range_errors(sample_profile)
    assert "Age must be between 13 and 100." in errors
    assert "Maximum duration per session (minutes) is required." in errors
    assert len(errors) == 2


def test_profile_range_errors_total_hours(sample_profile):
    sample_profile.update(workoutPreferenceMode="total_hours", totalHoursPerWeek=0.25)
    assert profile_range_errors(sample_profile) == ["Total hours per week must be between 0.5 and 20."]


def test_coerce_plan_fills_defaults():
    plan = coerce_plan({"sessions": []})
    assert plan == {"title": "", "description": "", "sessions": []}


@pytest.mark.parametrize("value", [[], "plan", {"sessions": "day 1"}])
def test_coerce_plan_rejects_bad_shapes(value):
    with pytest.raises(ValueError):
        coerce_plan(value)


@pytest.mark.parametrize(
    "options, literal",
    [
        (GENDERS, Gender),
        (FITNESS_LEVELS, FitnessLevel),
        (WORKOUT_GOALS, WorkoutGoal),
        (EQUIPMENT_OPTIONS, Equipment),
        (TECHNIQUE_OPTIONS, Technique),
        (PREFERENCE_MODES, PreferenceMode),
        (INTENSITY_LEVELS, Intensity),
    ],
)
def test_option_lists_match_allowed_values(options, literal):
    assert [opt[0] for opt in options] == list(get_args(literal))


@pytest.mark.parametrize(
    "field, value",
    [
        ("gender", ["female"]),
        ("equipment", [{"name": "dumbbells"}]),
        ("favoriteExercises", "bench"),
        ("preferredTechniques", "hiit"),
        ("limitations", 42),
    ],
)
def test_validate_profile_rejects_wrong_types(sample_profile, field, value):
    sample_profile[field] = value
    with pytest.raises(ProfileValidationError, match=field):
        validate_profile(sample_profile)


def test_validate_profile_range_message(sample_profile):
    sample_profile["weight"] = 301
    with pytest.raises(ProfileValidationError) as exc_info:
        validate_profile(sample_profile)
    assert str(exc_info.value) == "Weight (kg) must be between 30 and 300."


def test_validate_profile_normalises(sample_profile):
    sample_profile.update(secondaryGoal="", nickname="Sam")
    profile = validate_profile(sample_profile)
    assert "secondaryGoal" not in profile
    assert "nickname" not in profile
    assert profile["equipment"] == ["dumbbells", "pull_up_bar"]


def test_coerce_plan_keeps_valid_plan(sample_plan):
    assert coerce_plan(sample_plan) == sample_plan


def test_coerce_plan_normalises_intensity(sample_plan):
    sample_plan["sessions"][0]["intensity"] = "Very High"
    assert coerce_plan(sample_plan)["sessions"][0]["intensity"] == "very_high"


def test_coerce_plan_checks_demo_media(sample_plan):
    exercise = sample_plan["sessions"][0]["exercises"][0]
    exercise["demoMedia"] = {"type": "video", "url": "https://example.com/press.mp4"}
    assert coerce_plan(sample_plan)["sessions"][0]["exercises"][0]["demoMedia"]["type"] == "video"

    exercise["demoMedia"] = {"type": "gif", "url": "https://example.com/press.gif"}
    with pytest.raises(ValueError):
        coerce_plan(sample_plan)
