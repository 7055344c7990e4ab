import logging
import tempfile
from typing import Any, Dict, Optional, Tuple

import gradio as gr

from agents import generator
from agents.errors import GatewayError
from agents.prompt_chat import CHAT_GREETING
from logic.logic_display import format_timestamp, render_plan_markdown, write_export
from logic.logic_form import generation_finished, wizard_view
from stores import app_stores
from workout_types import ProfileValidationError

logger = logging.getLogger(__name__)

GENERATE_ERROR = "Failed to generate workout plan. Please try again."


def new_chat_history():
    return [{"role": "assistant", "content": CHAT_GREETING}]


# ---------------- Core operations ----------------


def generate_and_store(profile: Dict[str, Any]) -> Tuple[Dict[str, Any], Optional[str]]:
    """
    Generate a plan for the profile and persist it as current plan and
    history entry. Returns the plan and the time it became current.
    """
    plan = generator.plan_generator.generate(profile)
    timestamp = app_stores.plan.save(plan)
    app_stores.history.save(plan)
    return plan, timestamp


def apply_plan_update(plan: Dict[str, Any]) -> Optional[str]:
    """A plan changed through the chat becomes current and is added to history."""
    timestamp = app_stores.plan.save(plan)
    app_stores.history.save(plan)
    return timestamp


def load_plan_from_history(item_id: str) -> Optional[Tuple[Dict[str, Any], Optional[str]]]:
    """Make a history entry the current plan. History itself is left unchanged."""
    item = app_stores.history.get(item_id)
    if not item:
        return None
    return item["plan"], app_stores.plan.save(item["plan"])


# ---------------- Gradio glue ----------------


def plan_panel_view(plan: Optional[Dict[str, Any]], timestamp: Optional[str] = None) -> Tuple:
    """Updates for: form_panel, plan_panel, plan_markdown, plan_timestamp, error_box"""
    has_plan = plan is not None
    timestamp = timestamp if has_plan else None
    return (
        gr.update(visible=not has_plan),
        gr.update(visible=has_plan),
        render_plan_markdown(plan, timestamp) if has_plan else "",
        format_timestamp(timestamp),
        gr.update(value="", visible=False),
    )


def init_plan_action():
    plan = app_stores.plan.get()
    timestamp = app_stores.plan.get_timestamp() if plan is not None else None
    return (plan, timestamp, new_chat_history()) + plan_panel_view(plan, timestamp)


def generate_plan_action(wizard):
    """
    Runs after the wizard's submit step. Does nothing unless the wizard has
    queued a generation (the save dialog may still be open).
    """
    if not wizard.get("pending_generate"):
        unchanged = tuple(gr.update() for _ in range(8))
        return (wizard,) + unchanged + wizard_view(wizard)

    try:
        plan, timestamp = generate_and_store(wizard["profile"])
    except (GatewayError, ProfileValidationError):
        logger.exception("Error generating workout plan")
        w = generation_finished(wizard, success=False)
        error = gr.update(value=f"**Error:** {GENERATE_ERROR}", visible=True)
        return (
            (w, gr.update(), gr.update(), gr.update())
            + (gr.update(), gr.update(), gr.update(), gr.update(), error)
            + wizard_view(w)
        )

    w = generation_finished(wizard, success=True)
    return (w, plan, timestamp, new_chat_history()) + plan_panel_view(plan, timestamp) + wizard_view(w)


def clear_plan_action():
    app_stores.plan.clear()
    return (None, None, new_chat_history()) + plan_panel_view(None)


def export_plan_action(plan, fmt: str):
    if not plan:
        return gr.update(value=None, visible=False)
    directory = tempfile.mkdtemp(prefix="workout_export_")
    path = write_export(plan, fmt, directory)
    return gr.update(value=path, visible=True)
