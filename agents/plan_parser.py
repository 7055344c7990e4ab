"""
Parsing of model responses into workout plans.

Two response shapes are understood:

- generation: the whole response is a plan JSON object, optionally wrapped
  in a ``` / ```json code fence;
- modification: free text followed by one block

      {MODIFIED_PLAN}
      <plan JSON, optionally fenced>
      {/MODIFIED_PLAN}

  where the text before the block is the explanation shown to the user.
"""

import enum
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from agents.errors import ParseError
from workout_types import coerce_plan

logger = logging.getLogger(__name__)

PLAN_OPEN = "{MODIFIED_PLAN}"
PLAN_CLOSE = "{/MODIFIED_PLAN}"

MODIFIED_PLAN_RE = re.compile(
    re.escape(PLAN_OPEN) + r"(?P<body>.*?)" + re.escape(PLAN_CLOSE),
    re.DOTALL,
)
CODE_FENCE_RE = re.compile(r"^```[A-Za-z]*[ \t]*\n?(?P<body>.*?)\n?[ \t]*```$", re.DOTALL)


class BlockStatus(enum.Enum):
    OK = "ok"
    NO_BLOCK_FOUND = "no_block_found"
    MALFORMED_JSON = "malformed_json"


@dataclass
class PlanBlock:
    status: BlockStatus
    explanation: str
    plan: Optional[Dict[str, Any]] = None


def strip_code_fence(text: str) -> str:
    s = (text or "").strip()
    m = CODE_FENCE_RE.match(s)
    if m:
        return m.group("body").strip()
    return s


def parse_plan_json(text: str) -> Dict[str, Any]:
    """Parse a (possibly fenced) JSON plan, raising ParseError on failure."""
    body = strip_code_fence(text)
    try:
        return coerce_plan(json.loads(body))
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too
        raise ParseError(f"Failed to parse workout plan from AI response: {e}", raw_text=text) from e


def extract_modified_plan(text: str) -> PlanBlock:
    text = text or ""
    m = MODIFIED_PLAN_RE.search(text)
    if not m:
        return PlanBlock(status=BlockStatus.NO_BLOCK_FOUND, explanation=text)

    explanation = text[: m.start()].strip() or text
    try:
        plan = parse_plan_json(m.group("body"))
    except ParseError as e:
        logger.warning("Failed to parse modified plan: %s", e)
        return PlanBlock(status=BlockStatus.MALFORMED_JSON, explanation=explanation)
    return PlanBlock(status=BlockStatus.OK, explanation=explanation, plan=plan)
