import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

import gradio as gr

from stores import app_stores
from workout_types import (
    add_favorite_exercise,
    default_user_profile,
    profile_range_errors,
    remove_favorite_exercise,
    toggle_equipment,
    toggle_technique,
)

logger = logging.getLogger(__name__)

TOTAL_STEPS = 4
GENERATING_STEP = 5

STEP_TITLES = {
    1: "Basic Information",
    2: "Fitness Profile",
    3: "Workout Preferences",
    4: "Preferences",
    5: "Generating your plan",
}

STEP_FIELDS = {
    1: ["age", "height", "weight"],
    2: [],
    3: None,  # depends on the preference mode
    4: [],
}


def new_wizard_state(saved_profile: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Fresh wizard state, prefilled from a saved profile record if given."""
    if saved_profile:
        profile = copy.deepcopy(saved_profile.get("profile") or default_user_profile())
        profile_id = saved_profile.get("id")
        profile_name = saved_profile.get("name", "")
    else:
        profile = default_user_profile()
        profile_id = None
        profile_name = ""
    return {
        "step": 1,
        "profile": profile,
        "profile_id": profile_id,
        "profile_name": profile_name,
        "show_save_dialog": False,
        "pending_generate": False,
        "errors": [],
    }


def initial_wizard_state() -> Dict[str, Any]:
    return new_wizard_state(app_stores.profiles.get_active_profile())


# ---------------- Pure state transitions ----------------


def step_errors(step: int, profile: Dict[str, Any]) -> List[str]:
    fields = STEP_FIELDS.get(step)
    if fields is None:
        if profile.get("workoutPreferenceMode") == "total_hours":
            fields = ["totalHoursPerWeek"]
        else:
            fields = ["sessionsPerWeek", "timePerSession"]
    if not fields:
        return []
    return profile_range_errors(profile, fields)


def next_step(wizard: Dict[str, Any]) -> Dict[str, Any]:
    w = dict(wizard, errors=[], pending_generate=False)
    step = w["step"]
    if step > TOTAL_STEPS:
        return w

    errors = step_errors(step, w["profile"])
    if errors:
        w["errors"] = errors
        return w

    if step < TOTAL_STEPS:
        w["step"] = step + 1
        return w

    w["step"] = GENERATING_STEP
    if w.get("profile_id"):
        w["pending_generate"] = True
    else:
        w["show_save_dialog"] = True
    return w


def previous_step(wizard: Dict[str, Any]) -> Dict[str, Any]:
    w = dict(wizard, errors=[])
    if 1 < w["step"] < GENERATING_STEP:
        w["step"] -= 1
    return w


def confirm_save(wizard: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Save the wizard's profile under a new (or its current) name, then queue generation."""
    w = dict(wizard, errors=[])
    trimmed = (name or "").strip()
    if not trimmed:
        w["errors"] = ["Please enter a profile name"]
        return w

    profiles = app_stores.profiles
    if profiles.name_exists(trimmed, exclude_id=w.get("profile_id")):
        w["errors"] = ["A profile with this name already exists"]
        return w

    saved = profiles.save(trimmed, w["profile"], w.get("profile_id"))
    profiles.set_active_profile_id(saved["id"])
    logger.info("Saved profile %r (%s)", saved["name"], saved["id"])

    w.update(
        profile_id=saved["id"],
        profile_name=saved["name"],
        show_save_dialog=False,
        step=GENERATING_STEP,
        pending_generate=True,
    )
    return w


def cancel_save(wizard: Dict[str, Any]) -> Dict[str, Any]:
    return dict(wizard, show_save_dialog=False, step=TOTAL_STEPS, errors=[], pending_generate=False)


def load_profile(wizard: Dict[str, Any], profile_id: Optional[str]) -> Dict[str, Any]:
    saved = app_stores.profiles.get_by_id(profile_id) if profile_id else None
    if not saved:
        return dict(wizard, errors=["Please choose a saved profile."])
    app_stores.profiles.set_active_profile_id(saved["id"])
    return new_wizard_state(saved)


def new_profile(wizard: Dict[str, Any]) -> Dict[str, Any]:
    app_stores.profiles.set_active_profile_id(None)
    return new_wizard_state()


def delete_profile(wizard: Dict[str, Any], profile_id: Optional[str]) -> Dict[str, Any]:
    if not profile_id:
        return dict(wizard, errors=["Please choose a saved profile."])
    app_stores.profiles.delete(profile_id)
    if wizard.get("profile_id") == profile_id:
        return new_profile(wizard)
    return dict(wizard, errors=[])


def update_current_profile(wizard: Dict[str, Any]) -> Dict[str, Any]:
    if wizard.get("profile_id") and wizard.get("profile_name"):
        app_stores.profiles.save(wizard["profile_name"], wizard["profile"], wizard["profile_id"])
    return dict(wizard, errors=[])


def generation_finished(wizard: Dict[str, Any], success: bool) -> Dict[str, Any]:
    """Reset after a generation attempt: start over on success, back to step 4 on failure."""
    if success:
        return dict(wizard, step=1, pending_generate=False, errors=[])
    return dict(wizard, step=TOTAL_STEPS, pending_generate=False)


def apply_selection_toggle(current: List[str], selected: List[str], toggle) -> List[str]:
    """
    Translate a checkbox-group change into single-tag toggles so that the
    equipment and technique rules apply to whichever tag was clicked.
    """
    selected = list(selected or [])
    added = [s for s in selected if s not in current]
    removed = [c for c in current if c not in selected]
    result = list(current)
    for tag in added + removed:
        result = toggle(result, tag)
    return result


# ---------------- Gradio glue ----------------


def collect_profile(
    wizard: Dict[str, Any],
    gender,
    age,
    height,
    weight,
    fitness_level,
    goal,
    secondary_goal,
    limitations,
    mode,
    sessions_per_week,
    time_per_session,
    total_hours,
) -> Dict[str, Any]:
    """Merge the form's scalar inputs into the wizard's profile."""
    profile = dict(wizard["profile"])
    profile.update(
        {
            "gender": gender,
            "age": age,
            "height": height,
            "weight": weight,
            "fitnessLevel": fitness_level,
            "goal": goal,
            "limitations": limitations or "",
            "workoutPreferenceMode": mode,
        }
    )
    if secondary_goal and secondary_goal != goal:
        profile["secondaryGoal"] = secondary_goal
    else:
        profile.pop("secondaryGoal", None)

    if mode == "total_hours":
        profile["totalHoursPerWeek"] = total_hours
        profile.pop("sessionsPerWeek", None)
        profile.pop("timePerSession", None)
    else:
        profile["sessionsPerWeek"] = sessions_per_week
        profile["timePerSession"] = time_per_session
        profile.pop("totalHoursPerWeek", None)
    return dict(wizard, profile=profile)


def wizard_view(wizard: Dict[str, Any]) -> Tuple:
    """
    Updates for:
    step_indicator, step1..step5 columns, nav_row, prev_btn, next_btn,
    save_dialog, form_errors
    """
    step = wizard["step"]
    if step <= TOTAL_STEPS:
        indicator = f"### Step {step} of {TOTAL_STEPS}: {STEP_TITLES[step]}"
    else:
        indicator = f"### {STEP_TITLES[GENERATING_STEP]}..."
    errors = wizard.get("errors") or []
    error_md = "\n".join(f"- {e}" for e in errors)
    show_dialog = bool(wizard.get("show_save_dialog"))

    return (
        gr.update(value=indicator),
        gr.update(visible=(step == 1)),
        gr.update(visible=(step == 2)),
        gr.update(visible=(step == 3)),
        gr.update(visible=(step == 4)),
        gr.update(visible=(step == GENERATING_STEP and not show_dialog)),
        gr.update(visible=(step <= TOTAL_STEPS)),
        gr.update(visible=(1 < step <= TOTAL_STEPS)),
        gr.update(value="Generate Plan" if step == TOTAL_STEPS else "Next"),
        gr.update(visible=show_dialog),
        gr.update(value=error_md, visible=bool(errors)),
    )


def profile_field_values(profile: Dict[str, Any]) -> Tuple:
    """
    Values for:
    gender, age, height, weight, fitness_level, goal, secondary_goal,
    equipment, limitations, mode, sessions_per_week, time_per_session,
    total_hours, favorites, techniques
    """
    mode = profile.get("workoutPreferenceMode", "sessions_per_week")
    per_session = mode == "sessions_per_week"
    return (
        profile.get("gender"),
        profile.get("age"),
        profile.get("height"),
        profile.get("weight"),
        profile.get("fitnessLevel"),
        profile.get("goal"),
        profile.get("secondaryGoal") or "",
        list(profile.get("equipment") or []),
        profile.get("limitations") or "",
        mode,
        gr.update(value=profile.get("sessionsPerWeek") or 3, visible=per_session),
        gr.update(value=profile.get("timePerSession") or 60, visible=per_session),
        gr.update(value=profile.get("totalHoursPerWeek") or 3, visible=not per_session),
        favorites_update(profile),
        list(profile.get("preferredTechniques") or []),
    )


def favorites_update(profile: Dict[str, Any]):
    favorites = list(profile.get("favoriteExercises") or [])
    return gr.update(choices=favorites, value=[])


def profile_menu_view(wizard: Dict[str, Any]) -> Tuple:
    """Updates for: profile_dropdown, profile_status"""
    saved = app_stores.profiles.get_all()
    choices = [(p.get("name", ""), p.get("id")) for p in saved]
    value = wizard.get("profile_id") if any(p.get("id") == wizard.get("profile_id") for p in saved) else None
    if wizard.get("profile_name"):
        status = f"Current profile: **{wizard['profile_name']}**"
    else:
        status = "Unsaved profile. You will be asked to name it before generating."
    return gr.update(choices=choices, value=value), status


def full_form_view(wizard: Dict[str, Any]) -> Tuple:
    return (wizard,) + wizard_view(wizard) + profile_field_values(wizard["profile"]) + profile_menu_view(wizard)


def init_form_action():
    return full_form_view(initial_wizard_state())


def next_step_action(wizard, *fields):
    w = next_step(collect_profile(wizard, *fields))
    return (w,) + wizard_view(w)


def previous_step_action(wizard, *fields):
    w = previous_step(collect_profile(wizard, *fields))
    return (w,) + wizard_view(w)


def confirm_save_action(wizard, name):
    w = confirm_save(wizard, name)
    save_error = "" if not w["errors"] else w["errors"][0]
    if w["errors"]:
        # errors belong to the dialog, not the step
        w = dict(w, errors=[])
    return (w,) + wizard_view(w) + (gr.update(value=save_error, visible=bool(save_error)),) + profile_menu_view(w)


def cancel_save_action(wizard):
    w = cancel_save(wizard)
    return (w,) + wizard_view(w) + (gr.update(value="", visible=False),)


def equipment_change_action(selected, wizard):
    profile = dict(wizard["profile"])
    profile["equipment"] = apply_selection_toggle(
        list(profile.get("equipment") or []), selected, toggle_equipment
    )
    w = dict(wizard, profile=profile)
    return w, gr.update(value=profile["equipment"])


def mode_change_action(mode):
    per_session = mode != "total_hours"
    return (
        gr.update(visible=per_session),
        gr.update(visible=per_session),
        gr.update(visible=not per_session),
    )


def technique_change_action(selected, wizard):
    profile = dict(wizard["profile"])
    profile["preferredTechniques"] = apply_selection_toggle(
        list(profile.get("preferredTechniques") or []), selected, toggle_technique
    )
    return dict(wizard, profile=profile)


def add_favorite_action(text, wizard):
    profile = dict(wizard["profile"])
    before = list(profile.get("favoriteExercises") or [])
    profile["favoriteExercises"] = add_favorite_exercise(before, text)
    w = dict(wizard, profile=profile)
    # keep the text when it was rejected so the user can fix it
    cleared = "" if profile["favoriteExercises"] != before else text
    return w, favorites_update(profile), cleared


def remove_favorites_action(selected, wizard):
    profile = dict(wizard["profile"])
    favorites = list(profile.get("favoriteExercises") or [])
    for exercise in selected or []:
        favorites = remove_favorite_exercise(favorites, exercise)
    profile["favoriteExercises"] = favorites
    return dict(wizard, profile=profile), favorites_update(profile)


def load_profile_action(wizard, profile_id):
    return full_form_view(load_profile(wizard, profile_id))


def new_profile_action(wizard):
    return full_form_view(new_profile(wizard))


def delete_profile_action(wizard, profile_id):
    return full_form_view(delete_profile(wizard, profile_id))


def update_profile_action(wizard, *fields):
    w = update_current_profile(collect_profile(wizard, *fields))
    if w.get("profile_id"):
        msg = f"Profile **{w['profile_name']}** updated."
    else:
        msg = "Save the profile first: it is saved when you generate a plan."
    return w, msg
