import json
import os
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from workout_types import INTENSITY_LEVELS, label_for

CSV_COLUMNS = [
    "Day",
    "Exercise",
    "Sets",
    "Reps",
    "Rest",
    "Duration (min)",
    "Execution Instructions",
    "Notes",
]

BANNER = "━" * 60

EXPORT_FORMATS = {"json", "csv", "txt"}


def format_timestamp(timestamp: Optional[str]) -> str:
    if not timestamp:
        return ""
    try:
        dt = datetime.fromisoformat(timestamp)
    except ValueError:
        return timestamp
    return dt.astimezone().strftime("%Y-%m-%d • %H:%M")


def _session_meta(session: Dict[str, Any]) -> List[str]:
    parts = []
    if session.get("totalDurationMinutes"):
        parts.append(f"~{session['totalDurationMinutes']} min")
    if session.get("intensity"):
        parts.append(f"Intensity: {label_for(INTENSITY_LEVELS, session['intensity'])}")
    return parts


def render_plan_markdown(plan: Optional[Dict[str, Any]], timestamp: Optional[str] = None) -> str:
    """Render a plan for the read-only plan view."""
    if not plan:
        return "No workout plan yet."

    lines: List[str] = [f"# {plan.get('title') or 'Workout Plan'}"]
    when = format_timestamp(timestamp)
    if when:
        lines.append(f"*{when}*")
    if plan.get("description"):
        lines += ["", plan["description"]]

    for session in plan.get("sessions") or []:
        lines += ["", f"## Day {session.get('dayNumber', '?')}: {session.get('dayName', '')}"]
        meta = _session_meta(session)
        if meta:
            lines.append(" | ".join(meta))
        if session.get("targetMuscleGroups"):
            lines.append(f"**Target muscles:** {', '.join(session['targetMuscleGroups'])}")
        lines.append("")

        for idx, ex in enumerate(session.get("exercises") or [], start=1):
            head = (
                f"{idx}. **{ex.get('name', '')}**: {ex.get('sets', '')} sets × "
                f"{ex.get('reps', '')}, rest {ex.get('rest', '')}"
            )
            if ex.get("durationMinutes"):
                head += f" (~{ex['durationMinutes']} min)"
            lines.append(head)
            if ex.get("executionInstructions"):
                lines.append(f"    - Execution: {ex['executionInstructions']}")
            if ex.get("notes"):
                lines.append(f"    - Notes: {ex['notes']}")
            media = ex.get("demoMedia") or {}
            if media.get("url"):
                lines.append(f"    - [Demo ({media.get('type', 'link')})]({media['url']})")

    tips = plan.get("tips") or []
    if tips:
        lines += ["", "## Tips for success", ""]
        lines += [f"- {tip}" for tip in tips]

    return "\n".join(lines)


# ---------------- Exports ----------------


def export_json(plan: Dict[str, Any]) -> str:
    return json.dumps(plan, ensure_ascii=False, indent=2)


def plan_rows(plan: Dict[str, Any]) -> pd.DataFrame:
    rows = []
    for session in plan.get("sessions") or []:
        day = f"Day {session.get('dayNumber', '')}: {session.get('dayName', '')}"
        for ex in session.get("exercises") or []:
            rows.append(
                {
                    "Day": day,
                    "Exercise": ex.get("name", ""),
                    "Sets": ex.get("sets", ""),
                    "Reps": ex.get("reps", ""),
                    "Rest": ex.get("rest", ""),
                    "Duration (min)": ex.get("durationMinutes") or "",
                    "Execution Instructions": ex.get("executionInstructions") or "",
                    "Notes": ex.get("notes") or "",
                }
            )
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_csv(plan: Dict[str, Any]) -> str:
    return plan_rows(plan).to_csv(index=False)


def export_txt(plan: Dict[str, Any]) -> str:
    title = plan.get("title", "")
    out = [title, "=" * len(title), "", plan.get("description", ""), ""]

    for session in plan.get("sessions") or []:
        out += ["", BANNER, f"Day {session.get('dayNumber', '')}: {session.get('dayName', '')}"]
        meta = []
        if session.get("totalDurationMinutes"):
            meta.append(f"Duration: ~{session['totalDurationMinutes']} min")
        if session.get("intensity"):
            meta.append(f"Intensity: {session['intensity'].replace('_', ' ').upper()}")
        if meta:
            out.append(" | ".join(meta))
        if session.get("targetMuscleGroups"):
            out.append(f"Target Muscles: {', '.join(session['targetMuscleGroups'])}")
        out += [BANNER, ""]

        for idx, ex in enumerate(session.get("exercises") or [], start=1):
            out.append(f"{idx}. {ex.get('name', '')}")
            line = f"   Sets: {ex.get('sets', '')} | Reps: {ex.get('reps', '')} | Rest: {ex.get('rest', '')}"
            if ex.get("durationMinutes"):
                line += f" | Duration: ~{ex['durationMinutes']} min"
            out.append(line)
            if ex.get("executionInstructions"):
                out.append(f"   → Execution: {ex['executionInstructions']}")
            if ex.get("notes"):
                out.append(f"   Note: {ex['notes']}")
            out.append("")

    tips = plan.get("tips") or []
    if tips:
        out += ["", BANNER, "TIPS FOR SUCCESS", BANNER, ""]
        out += [f"{idx}. {tip}" for idx, tip in enumerate(tips, start=1)]

    return "\n".join(out) + "\n"


def export_filename(fmt: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"workout-plan-{today.isoformat()}.{fmt}"


def write_export(plan: Dict[str, Any], fmt: str, directory: str) -> str:
    """Write the plan in the given format into directory and return the file path."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    renderers = {"json": export_json, "csv": export_csv, "txt": export_txt}
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, export_filename(fmt))
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(renderers[fmt](plan))
    return path
