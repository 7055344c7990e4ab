import logging
from typing import Any, Dict, List

from agents.base import OpenAIStyleClient, extract_text
from agents.errors import ParseError
from agents.plan_parser import parse_plan_json
from agents.prompt_generator import (
    PLAN_IMPORTANT_INSTRUCTIONS,
    PLAN_JSON_SCHEMA,
    PLAN_PROMPT_INTRO,
    PLAN_REQUIREMENTS,
    SECONDARY_GOAL_CLAUSE,
)
from llm_config import GENERATOR_MODEL_NAME, LLM_BASE_URL, PLAN_MAX_TOKENS
from workout_types import validate_profile

logger = logging.getLogger(__name__)


def _format_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_profile_lines(profile: Dict[str, Any]) -> List[str]:
    """Render the profile as bullet lines, skipping absent optional fields."""
    lines = [
        f"- Gender: {profile['gender']}",
        f"- Age: {_format_number(profile['age'])} years",
        f"- Height: {_format_number(profile['height'])} cm",
        f"- Weight: {_format_number(profile['weight'])} kg",
        f"- Fitness Level: {profile['fitnessLevel']}",
        f"- Primary Goal: {profile['goal']}",
    ]
    if profile.get("secondaryGoal"):
        lines.append(f"- Secondary Goal: {profile['secondaryGoal']}")
    lines.append(f"- Available Equipment: {', '.join(profile['equipment'])}")

    if profile["workoutPreferenceMode"] == "sessions_per_week":
        lines.append(
            f"- Sessions Per Week: {_format_number(profile['sessionsPerWeek'])}, "
            f"Time Per Session: {_format_number(profile['timePerSession'])} minutes"
        )
    else:
        lines.append(
            f"- Total Hours Per Week: {_format_number(profile['totalHoursPerWeek'])} hours "
            "(distribute optimally)"
        )

    limitations = (profile.get("limitations") or "").strip()
    if limitations:
        lines.append(f"- Physical Limitations: {limitations}")
    techniques = profile.get("preferredTechniques") or []
    if techniques:
        lines.append(f"- Preferred Training Techniques: {', '.join(techniques)}")
    favorites = profile.get("favoriteExercises") or []
    if favorites:
        lines.append(f"- Favorite Exercises to Prioritize: {', '.join(favorites)}")
    return lines


class PlanGenerator:
    """
    Plan generation gateway.

    Turns a UserProfile into a single-message prompt, asks the model once and
    reads the reply back as a WorkoutPlan. Any failure raises a GatewayError;
    there is no retry and no partial plan.
    """

    def __init__(self, client: OpenAIStyleClient | None = None, max_tokens: int = PLAN_MAX_TOKENS):
        self.client = client or OpenAIStyleClient(LLM_BASE_URL, GENERATOR_MODEL_NAME)
        self.max_tokens = max_tokens

    def build_prompt(self, profile: Dict[str, Any]) -> str:
        profile = validate_profile(profile)

        secondary_clause = SECONDARY_GOAL_CLAUSE if profile.get("secondaryGoal") else ""
        requirements = "\n".join(
            f"{i}. {item.format(secondary_clause=secondary_clause)}"
            for i, item in enumerate(PLAN_REQUIREMENTS, start=1)
        )

        return (
            f"{PLAN_PROMPT_INTRO}\n\n"
            "**User Profile:**\n"
            + "\n".join(render_profile_lines(profile))
            + "\n\nCreate a comprehensive workout plan that:\n"
            + requirements
            + "\n\nReturn the workout plan as a valid JSON object with this exact structure:\n"
            + PLAN_JSON_SCHEMA
            + "\n\n"
            + PLAN_IMPORTANT_INSTRUCTIONS
        )

    def build_messages(self, profile: Dict[str, Any]) -> List[Dict[str, str]]:
        return [{"role": "user", "content": self.build_prompt(profile)}]

    def generate(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        messages = self.build_messages(profile)
        content = self.client.chat(messages, max_tokens=self.max_tokens)
        text = extract_text(content)

        try:
            plan = parse_plan_json(text)
        except ParseError:
            logger.error("Failed to parse plan generation response: %s", text)
            raise

        logger.info(
            "Generated workout plan %r with %d sessions",
            plan.get("title"),
            len(plan["sessions"]),
        )
        return plan


plan_generator = PlanGenerator()
