import logging
from typing import Any, Dict, List, Optional, Tuple

import gradio as gr

from agents import modifier
from agents.errors import GatewayError
from agents.prompt_chat import CHAT_ERROR_REPLY
from logic.logic_plan import apply_plan_update, plan_panel_view

logger = logging.getLogger(__name__)


def send_modification(
    user_input: str,
    chat_history: List[Dict[str, str]],
    plan: Optional[Dict[str, Any]],
    timestamp: Optional[str] = None,
) -> Tuple[List[Dict[str, str]], Optional[Dict[str, Any]], Optional[str]]:
    """
    Handle one chat turn.

    - Ask the modification gateway with the transcript as it was before this turn.
    - Append the user message and the assistant's explanation.
    - If the model returned a usable plan, make it the current plan.

    Returns the new transcript, the plan to show and its timestamp (both
    unchanged when the model did not return a usable plan or the request
    failed).
    """
    text = (user_input or "").strip()
    if not text or not plan:
        return chat_history, plan, timestamp

    new_history = chat_history + [{"role": "user", "content": user_input}]
    try:
        result = modifier.plan_modifier.modify(plan, user_input, chat_history)
    except (GatewayError, ValueError):
        logger.exception("Error modifying workout plan")
        return new_history + [{"role": "assistant", "content": CHAT_ERROR_REPLY}], plan, timestamp

    new_history = new_history + [{"role": "assistant", "content": result.response}]
    if result.updated_plan is None:
        return new_history, plan, timestamp

    return new_history, result.updated_plan, apply_plan_update(result.updated_plan)


def chat_lock_action():
    """Disable chat input while the model is working."""
    return gr.update(interactive=False), gr.update(interactive=False)


def chat_send_action(user_input, chat_history, plan, timestamp):
    """
    Updates for: chat_history_state, plan_state, plan_time_state, chatbot, chat_input,
    chat_send_btn, form_panel, plan_panel, plan_markdown, plan_timestamp, error_box
    """
    new_history, new_plan, new_timestamp = send_modification(user_input, chat_history, plan, timestamp)
    if new_plan is not plan:
        plan_updates = plan_panel_view(new_plan, new_timestamp)
    else:
        plan_updates = tuple(gr.update() for _ in range(5))
    return (
        new_history,
        new_plan,
        new_timestamp,
        new_history,
        gr.update(value="", interactive=True),
        gr.update(interactive=True),
    ) + plan_updates
