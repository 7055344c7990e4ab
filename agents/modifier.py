import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, get_args

from agents.base import OpenAIStyleClient, extract_text
from agents.plan_parser import PLAN_CLOSE, PLAN_OPEN, BlockStatus, extract_modified_plan
from agents.prompt_chat import MODIFY_SYSTEM_PROMPT_V1
from llm_config import LLM_BASE_URL, MODIFIER_MODEL_NAME, PLAN_MAX_TOKENS
from workout_types import ChatRole

logger = logging.getLogger(__name__)

CHAT_ROLES = set(get_args(ChatRole))


@dataclass
class ModifyResult:
    response: str
    updated_plan: Optional[Dict[str, Any]]
    status: BlockStatus


class PlanModifier:
    """
    Plan modification gateway.

    The current plan goes into the system prompt; the chat transcript and the
    new request follow as conversation turns. The reply's explanation is always
    returned. The plan is only returned when the sentinel block parses.
    """

    def __init__(self, client: OpenAIStyleClient | None = None, max_tokens: int = PLAN_MAX_TOKENS):
        self.client = client or OpenAIStyleClient(LLM_BASE_URL, MODIFIER_MODEL_NAME)
        self.max_tokens = max_tokens

    def build_system_prompt(self, plan: Dict[str, Any]) -> str:
        return MODIFY_SYSTEM_PROMPT_V1.format(
            plan_json=json.dumps(plan, ensure_ascii=False, indent=2),
            open_marker=PLAN_OPEN,
            close_marker=PLAN_CLOSE,
        )

    def build_messages(
        self,
        plan: Dict[str, Any],
        modification: str,
        chat_history: List[Dict[str, str]] | None = None,
    ) -> List[Dict[str, str]]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": self.build_system_prompt(plan)}
        ]
        for msg in chat_history or []:
            role = msg.get("role")
            if role not in CHAT_ROLES:
                raise ValueError(f"Unsupported chat role: {role!r}")
            messages.append({"role": role, "content": str(msg.get("content", ""))})
        messages.append({"role": "user", "content": modification})
        return messages

    def modify(
        self,
        plan: Dict[str, Any],
        modification: str,
        chat_history: List[Dict[str, str]] | None = None,
    ) -> ModifyResult:
        messages = self.build_messages(plan, modification, chat_history)
        content = self.client.chat(messages, max_tokens=self.max_tokens)
        text = extract_text(content)

        block = extract_modified_plan(text)
        if block.status is BlockStatus.NO_BLOCK_FOUND:
            logger.info("Modification response contained no plan block")
        return ModifyResult(response=block.explanation, updated_plan=block.plan, status=block.status)


plan_modifier = PlanModifier()
