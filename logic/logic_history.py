from datetime import datetime
from typing import Any, Dict, List, Tuple

import gradio as gr

from logic.logic_plan import load_plan_from_history, new_chat_history, plan_panel_view
from stores import app_stores


def history_label(item: Dict[str, Any]) -> str:
    title = item.get("name") or (item.get("plan") or {}).get("title") or "Untitled plan"
    created = item.get("createdAt", "")
    try:
        created = datetime.fromisoformat(created).astimezone().strftime("%b %d, %Y %H:%M")
    except ValueError:
        pass
    return f"{title} ({created})" if created else title


def history_choices() -> List[Tuple[str, str]]:
    return [(history_label(item), item["id"]) for item in app_stores.history.get_all() if item.get("id")]


def history_status_text() -> str:
    count = len(app_stores.history.get_all())
    if not count:
        return "Your saved workout plans will appear here."
    return f"{count} saved workout{'s' if count != 1 else ''}"


def refresh_history_action():
    """Updates for: history_dropdown, history_status"""
    return gr.update(choices=history_choices(), value=None), history_status_text()


def select_history_action(item_id):
    """Prefill the rename box with the selected item's current name."""
    item = app_stores.history.get(item_id) if item_id else None
    return (item or {}).get("name", "")


def rename_history_action(item_id, name):
    if not item_id:
        return gr.update(), "Please choose a workout from the list."
    app_stores.history.update_name(item_id, (name or "").strip())
    return gr.update(choices=history_choices(), value=item_id), "Workout renamed."


def delete_history_action(item_id):
    if not item_id:
        return gr.update(), "Please choose a workout from the list."
    app_stores.history.delete(item_id)
    return gr.update(choices=history_choices(), value=None), history_status_text()


def clear_history_action():
    """Updates for: history_dropdown, history_status"""
    app_stores.history.clear()
    return gr.update(choices=[], value=None), history_status_text()


def load_history_action(item_id, plan, timestamp, chat_history):
    """
    Updates for: plan_state, plan_time_state, chat_history_state, form_panel,
    plan_panel, plan_markdown, plan_timestamp, error_box, history_status
    """
    loaded = load_plan_from_history(item_id) if item_id else None
    if loaded is None:
        return (plan, timestamp, chat_history) + tuple(gr.update() for _ in range(5)) + (
            "Please choose a workout from the list.",
        )
    loaded_plan, loaded_at = loaded
    return (
        (loaded_plan, loaded_at, new_chat_history())
        + plan_panel_view(loaded_plan, loaded_at)
        + ("Loaded workout from history.",)
    )
