from logic.logic_form import (
    GENERATING_STEP,
    apply_selection_toggle,
    cancel_save,
    collect_profile,
    confirm_save,
    confirm_save_action,
    delete_profile,
    equipment_change_action,
    full_form_view,
    generation_finished,
    initial_wizard_state,
    load_profile,
    new_wizard_state,
    next_step,
    next_step_action,
    previous_step,
    update_current_profile,
    wizard_view,
)
from stores import app_stores
from workout_types import toggle_equipment


def _form_fields(**overrides):
    values = {
        "gender": "male",
        "age": 30,
        "height": 180,
        "weight": 80,
        "fitness_level": "beginner",
        "goal": "weight_loss",
        "secondary_goal": "",
        "limitations": "",
        "mode": "sessions_per_week",
        "sessions_per_week": 3,
        "time_per_session": 45,
        "total_hours": 3,
    }
    values.update(overrides)
    return list(values.values())


def _at_step(step, **kwargs):
    w = new_wizard_state()
    w.update(step=step, **kwargs)
    return w


def test_wizard_walks_to_save_dialog_for_new_profile():
    w = new_wizard_state()
    for expected in (2, 3, 4):
        w = next_step(w)
        assert w["step"] == expected
        assert w["errors"] == []

    w = next_step(w)
    assert w["step"] == GENERATING_STEP
    assert w["show_save_dialog"] is True
    assert w["pending_generate"] is False


def test_wizard_with_saved_profile_generates_directly(sample_profile):
    w = _at_step(4, profile=sample_profile, profile_id="p1", profile_name="Mine")
    w = next_step(w)
    assert w["pending_generate"] is True
    assert w["show_save_dialog"] is False


def test_out_of_range_blocks_step():
    w = new_wizard_state()
    w["profile"]["age"] = 5
    w = next_step(w)
    assert w["step"] == 1
    assert w["errors"] == ["Age must be between 13 and 100."]


def test_step3_validates_active_mode_only():
    w = _at_step(3)
    w["profile"].update(workoutPreferenceMode="total_hours", totalHoursPerWeek=30, sessionsPerWeek=99)
    assert next_step(w)["errors"] == ["Total hours per week must be between 0.5 and 20."]

    w["profile"]["totalHoursPerWeek"] = 5
    assert next_step(w)["step"] == 4


def test_previous_step_bounds():
    assert previous_step(new_wizard_state())["step"] == 1
    assert previous_step(_at_step(3))["step"] == 2
    assert previous_step(_at_step(GENERATING_STEP))["step"] == GENERATING_STEP


def test_confirm_save_requires_name():
    w = confirm_save(_at_step(GENERATING_STEP, show_save_dialog=True), "   ")
    assert w["errors"] == ["Please enter a profile name"]
    assert app_stores.profiles.get_all() == []


def test_confirm_save_rejects_duplicate_name(sample_profile):
    app_stores.profiles.save("Home", sample_profile)
    w = confirm_save(_at_step(GENERATING_STEP, show_save_dialog=True), "home")
    assert w["errors"] == ["A profile with this name already exists"]


def test_confirm_save_persists_and_queues_generation():
    w = confirm_save(_at_step(GENERATING_STEP, show_save_dialog=True), " Home ")

    assert w["profile_name"] == "Home"
    assert w["pending_generate"] is True
    assert w["show_save_dialog"] is False
    assert app_stores.profiles.get_active_profile_id() == w["profile_id"]
    assert app_stores.profiles.get_by_id(w["profile_id"])["profile"] == w["profile"]


def test_confirm_save_action_shows_error_in_dialog():
    out = confirm_save_action(_at_step(GENERATING_STEP, show_save_dialog=True), "")
    w = out[0]
    save_error = out[12]
    assert w["errors"] == []
    assert save_error["visible"] is True
    assert save_error["value"] == "Please enter a profile name"


def test_cancel_save_returns_to_last_step():
    w = cancel_save(_at_step(GENERATING_STEP, show_save_dialog=True))
    assert w["step"] == 4
    assert w["show_save_dialog"] is False


def test_generation_finished():
    w = _at_step(GENERATING_STEP, pending_generate=True)
    assert generation_finished(w, success=True)["step"] == 1
    failed = generation_finished(w, success=False)
    assert failed["step"] == 4
    assert failed["pending_generate"] is False


def test_initial_state_uses_active_profile(sample_profile):
    saved = app_stores.profiles.save("Active", sample_profile)
    app_stores.profiles.set_active_profile_id(saved["id"])

    w = initial_wizard_state()
    assert w["profile"] == sample_profile
    assert w["profile_name"] == "Active"


def test_load_and_delete_profile(sample_profile):
    saved = app_stores.profiles.save("Gym", sample_profile)

    w = load_profile(new_wizard_state(), saved["id"])
    assert w["profile_id"] == saved["id"]
    assert app_stores.profiles.get_active_profile_id() == saved["id"]

    w = delete_profile(w, saved["id"])
    assert w["profile_id"] is None
    assert app_stores.profiles.get_all() == []
    assert app_stores.profiles.get_active_profile_id() is None


def test_load_unknown_profile_reports_error():
    w = load_profile(new_wizard_state(), "missing")
    assert w["errors"] == ["Please choose a saved profile."]


def test_update_current_profile(sample_profile):
    saved = app_stores.profiles.save("Gym", sample_profile)
    w = new_wizard_state(saved)
    w["profile"]["age"] = 40
    update_current_profile(w)
    assert app_stores.profiles.get_by_id(saved["id"])["profile"]["age"] == 40


def test_collect_profile_switches_mode_fields():
    w = collect_profile(new_wizard_state(), *_form_fields(mode="total_hours", total_hours=5))
    assert w["profile"]["totalHoursPerWeek"] == 5
    assert "sessionsPerWeek" not in w["profile"]
    assert "timePerSession" not in w["profile"]


def test_collect_profile_drops_secondary_equal_to_primary():
    w = collect_profile(new_wizard_state(), *_form_fields(secondary_goal="weight_loss"))
    assert "secondaryGoal" not in w["profile"]
    w = collect_profile(new_wizard_state(), *_form_fields(secondary_goal="cardio"))
    assert w["profile"]["secondaryGoal"] == "cardio"


def test_next_step_action_outputs():
    out = next_step_action(new_wizard_state(), *_form_fields())
    assert len(out) == 12
    assert out[0]["step"] == 2
    assert out[0]["profile"]["goal"] == "weight_loss"


def test_wizard_view_visibility():
    view = wizard_view(_at_step(2))
    assert len(view) == 11
    assert [u["visible"] for u in view[1:6]] == [False, True, False, False, False]
    assert view[7]["visible"] is True

    view = wizard_view(_at_step(4))
    assert view[8]["value"] == "Generate Plan"

    view = wizard_view(_at_step(GENERATING_STEP, show_save_dialog=True))
    assert view[5]["visible"] is False
    assert view[6]["visible"] is False
    assert view[9]["visible"] is True


def test_full_form_view_length():
    assert len(full_form_view(new_wizard_state())) == 1 + 11 + 15 + 2


def test_apply_selection_toggle_enforces_equipment_rules():
    assert apply_selection_toggle(["dumbbells"], ["dumbbells", "full_gym"], toggle_equipment) == ["full_gym"]
    assert apply_selection_toggle(["full_gym"], ["full_gym", "barbell"], toggle_equipment) == ["barbell"]
    assert apply_selection_toggle(["barbell"], [], toggle_equipment) == ["bodyweight"]


def test_equipment_change_action_rewrites_selection():
    w = new_wizard_state()
    w["profile"]["equipment"] = ["dumbbells", "barbell"]
    new_w, update = equipment_change_action(["dumbbells", "barbell", "full_gym"], w)
    assert new_w["profile"]["equipment"] == ["full_gym"]
    assert update["value"] == ["full_gym"]
