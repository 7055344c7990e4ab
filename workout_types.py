"""
Shared vocabulary for user profiles and workout plans.

Profiles and plans travel through the app as plain JSON-compatible dicts with
camelCase keys, the same shape that is persisted in local storage and sent
over the API. The pydantic models below are the schema for those dicts:
anything coming from a client or from the model is validated through them.
"""

from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

# ---------------- Enumerations ----------------

Gender = Literal["male", "female", "other"]
FitnessLevel = Literal["beginner", "intermediate", "advanced"]
WorkoutGoal = Literal["strength", "cardio", "weight_loss", "muscle_gain", "flexibility", "general_fitness"]
Equipment = Literal[
    "full_gym",
    "dumbbells",
    "barbell",
    "pull_up_bar",
    "resistance_bands",
    "weighted_vest",
    "jump_rope",
    "kettlebell",
    "medicine_ball",
    "foam_roller",
    "yoga_mat",
    "bodyweight",
]
Technique = Literal[
    "hiit", "circuit_training", "supersets", "dropsets", "pyramid_sets", "tempo_training", "none"
]
PreferenceMode = Literal["sessions_per_week", "total_hours"]
Intensity = Literal["low", "moderate", "high", "very_high"]
DemoMediaType = Literal["image", "video", "link"]
ChatRole = Literal["user", "assistant"]

# UI labels (and descriptions) for the enumerations above
GENDERS: List[Tuple[str, str]] = [
    ("male", "Male"),
    ("female", "Female"),
    ("other", "Other"),
]

FITNESS_LEVELS: List[Tuple[str, str, str]] = [
    ("beginner", "Beginner", "Haven't exercised regularly or just starting out"),
    ("intermediate", "Intermediate", "Exercise 2-3 times per week with basic knowledge"),
    ("advanced", "Advanced", "Consistent training with excellent form and technique"),
]

WORKOUT_GOALS: List[Tuple[str, str]] = [
    ("strength", "Build Strength"),
    ("cardio", "Improve Cardio"),
    ("weight_loss", "Weight Loss"),
    ("muscle_gain", "Muscle Gain"),
    ("flexibility", "Flexibility"),
    ("general_fitness", "General Fitness"),
]

EQUIPMENT_OPTIONS: List[Tuple[str, str, str]] = [
    ("full_gym", "Full Gym Access", "Everything included"),
    ("dumbbells", "Dumbbells", "Various weights"),
    ("barbell", "Barbell", "With weight plates"),
    ("pull_up_bar", "Pull-up Bar", "Wall or door mounted"),
    ("resistance_bands", "Resistance Bands", "Various resistance levels"),
    ("weighted_vest", "Weighted Vest", "Add resistance to bodyweight"),
    ("jump_rope", "Jump Rope", "For cardio"),
    ("kettlebell", "Kettlebell", "For dynamic movements"),
    ("medicine_ball", "Medicine Ball", "For core and power"),
    ("foam_roller", "Foam Roller", "For recovery"),
    ("yoga_mat", "Yoga Mat", "For floor exercises"),
    ("bodyweight", "Bodyweight Only", "No equipment needed"),
]

TECHNIQUE_OPTIONS: List[Tuple[str, str, str]] = [
    ("hiit", "HIIT (High-Intensity Interval Training)", "Short bursts of intense exercise"),
    ("circuit_training", "Circuit Training", "Series of exercises with minimal rest"),
    ("supersets", "Supersets", "Two exercises back-to-back"),
    ("dropsets", "Drop Sets", "Reduce weight and continue sets"),
    ("pyramid_sets", "Pyramid Sets", "Gradually increase/decrease weight"),
    ("tempo_training", "Tempo Training", "Controlled movement speed"),
    ("none", "No Preference", "Let the coach decide"),
]

PREFERENCE_MODES: List[Tuple[str, str]] = [
    ("sessions_per_week", "Sessions per week"),
    ("total_hours", "Total hours per week"),
]

INTENSITY_LEVELS: List[Tuple[str, str]] = [
    ("low", "Low"),
    ("moderate", "Moderate"),
    ("high", "High"),
    ("very_high", "Very High"),
]

FULL_GYM = "full_gym"
BODYWEIGHT = "bodyweight"

# (min, max) accepted by the wizard and the API
PROFILE_RANGES: Dict[str, Tuple[float, float]] = {
    "age": (13, 100),
    "height": (100, 250),
    "weight": (30, 300),
    "sessionsPerWeek": (1, 7),
    "timePerSession": (15, 180),
    "totalHoursPerWeek": (0.5, 20),
}

FIELD_LABELS = {
    "age": "Age",
    "height": "Height (cm)",
    "weight": "Weight (kg)",
    "sessionsPerWeek": "Sessions per week",
    "timePerSession": "Maximum duration per session (minutes)",
    "totalHoursPerWeek": "Total hours per week",
}


def _bounds(field: str) -> Dict[str, float]:
    lo, hi = PROFILE_RANGES[field]
    return {"ge": lo, "le": hi}


class ProfileValidationError(ValueError):
    """Raised when a profile cannot be sent to the plan generator."""


# ---------------- Models ----------------


class UserProfile(BaseModel):
    gender: Gender
    age: int = Field(..., **_bounds("age"))
    height: float = Field(..., **_bounds("height"))
    weight: float = Field(..., **_bounds("weight"))
    fitnessLevel: FitnessLevel
    goal: WorkoutGoal
    secondaryGoal: Optional[WorkoutGoal] = None
    equipment: List[Equipment] = Field(..., min_length=1)
    workoutPreferenceMode: PreferenceMode
    sessionsPerWeek: Optional[int] = Field(None, **_bounds("sessionsPerWeek"))
    timePerSession: Optional[int] = Field(None, **_bounds("timePerSession"))
    totalHoursPerWeek: Optional[float] = Field(None, **_bounds("totalHoursPerWeek"))
    limitations: Optional[str] = None
    preferredTechniques: List[Technique] = Field(default_factory=list)
    favoriteExercises: List[str] = Field(default_factory=list)

    @field_validator("secondaryGoal", mode="before")
    @classmethod
    def _empty_secondary_goal(cls, v):
        # the form sends "" for "no secondary goal"
        return None if v == "" else v

    @model_validator(mode="after")
    def _check_schedule(self):
        if self.workoutPreferenceMode == "sessions_per_week":
            required = ("sessionsPerWeek", "timePerSession")
        else:
            required = ("totalHoursPerWeek",)
        missing = [f for f in required if getattr(self, f) is None]
        if missing:
            raise ValueError(
                f"{' and '.join(missing)} required when workoutPreferenceMode is "
                f"{self.workoutPreferenceMode}"
            )
        return self


Number = Union[int, float]
Scalar = Union[int, float, str]


class DemoMedia(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: DemoMediaType
    url: str
    thumbnail: Optional[str] = None


class Exercise(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    sets: Scalar
    reps: Scalar
    rest: Scalar
    executionInstructions: Optional[str] = None
    durationMinutes: Optional[Number] = None
    notes: Optional[str] = None
    demoMedia: Optional[DemoMedia] = None


class WorkoutSession(BaseModel):
    model_config = ConfigDict(extra="allow")

    dayNumber: int
    dayName: str
    exercises: List[Exercise]
    totalDurationMinutes: Optional[Number] = None
    intensity: Optional[Intensity] = None
    targetMuscleGroups: Optional[List[str]] = None

    @field_validator("intensity", mode="before")
    @classmethod
    def _normalize_intensity(cls, v):
        if isinstance(v, str):
            return v.strip().lower().replace(" ", "_").replace("-", "_")
        return v


class WorkoutPlan(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = ""
    description: str = ""
    sessions: List[WorkoutSession] = Field(default_factory=list)
    tips: Optional[List[str]] = None


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class ModifyRequest(BaseModel):
    currentPlan: WorkoutPlan
    modification: str
    chatHistory: List[ChatMessage] = Field(default_factory=list)

    @field_validator("modification")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("modification must not be empty")
        return v

    @field_validator("chatHistory", mode="before")
    @classmethod
    def _missing_history(cls, v):
        return [] if v is None else v


def validation_messages(errors: List[Dict[str, Any]]) -> List[str]:
    """
    Turn pydantic error dicts (ValidationError.errors(), or FastAPI's
    RequestValidationError.errors()) into short user-facing messages.
    """
    messages: List[str] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        kind = err.get("type", "")
        field = loc[0] if len(loc) == 1 else None

        if kind == "json_invalid":
            msg = "Request body is not valid JSON."
        elif kind in ("greater_than_equal", "less_than_equal") and field in PROFILE_RANGES:
            lo, hi = PROFILE_RANGES[field]
            msg = f"{FIELD_LABELS[field]} must be between {lo:g} and {hi:g}."
        elif loc:
            msg = f"Invalid {'.'.join(loc)}: {err.get('msg', '')}"
        else:
            msg = str(err.get("msg", "")).removeprefix("Value error, ")

        if msg not in messages:
            messages.append(msg)
    return messages


def label_for(options, value: Optional[str]) -> str:
    for opt in options:
        if opt[0] == value:
            return opt[1]
    return value or ""


def default_user_profile() -> Dict[str, Any]:
    return {
        "gender": "male",
        "age": 30,
        "height": 170,
        "weight": 70,
        "fitnessLevel": "intermediate",
        "goal": "general_fitness",
        "equipment": [BODYWEIGHT],
        "workoutPreferenceMode": "sessions_per_week",
        "sessionsPerWeek": 3,
        "timePerSession": 60,
        "limitations": "",
        "preferredTechniques": [],
        "favoriteExercises": [],
    }


# ---------------- Profile editing ----------------


def toggle_equipment(current: List[str], equipment: str) -> List[str]:
    """
    Toggle one equipment tag.

    Full gym is exclusive: selecting it drops everything else, selecting any
    other tag drops full gym. The result is never empty.
    """
    if equipment == FULL_GYM:
        return [FULL_GYM]
    updated = [e for e in (current or []) if e != FULL_GYM]
    if equipment in updated:
        updated = [e for e in updated if e != equipment]
    else:
        updated.append(equipment)
    return updated if updated else [BODYWEIGHT]


def toggle_technique(current: List[str], technique: str) -> List[str]:
    current = list(current or [])
    if technique in current:
        return [t for t in current if t != technique]
    return current + [technique]


def add_favorite_exercise(current: List[str], exercise: str) -> List[str]:
    current = list(current or [])
    trimmed = (exercise or "").strip()
    if trimmed and trimmed not in current:
        current.append(trimmed)
    return current


def remove_favorite_exercise(current: List[str], exercise: str) -> List[str]:
    return [e for e in (current or []) if e != exercise]


# ---------------- Validation ----------------


def validate_profile(profile: Any) -> Dict[str, Any]:
    """Validate a profile dict and return it normalised (absent optionals dropped)."""
    try:
        model = UserProfile.model_validate(profile)
    except ValidationError as e:
        raise ProfileValidationError(" ".join(validation_messages(e.errors()))) from e
    return model.model_dump(exclude_none=True)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def profile_range_errors(profile: Dict[str, Any], fields=None) -> List[str]:
    """Messages for numeric fields outside their range; used per wizard step."""
    if fields is None:
        fields = ["age", "height", "weight"]
        if profile.get("workoutPreferenceMode") == "total_hours":
            fields.append("totalHoursPerWeek")
        else:
            fields += ["sessionsPerWeek", "timePerSession"]

    errors: List[str] = []
    for field in fields:
        lo, hi = PROFILE_RANGES[field]
        value = profile.get(field)
        if not _is_number(value):
            errors.append(f"{FIELD_LABELS[field]} is required.")
        elif not lo <= value <= hi:
            errors.append(f"{FIELD_LABELS[field]} must be between {lo:g} and {hi:g}.")
    return errors


# ---------------- Plans ----------------


def coerce_plan(value: Any) -> Dict[str, Any]:
    """
    Accept a decoded JSON value as a WorkoutPlan dict.

    Raises pydantic.ValidationError (a ValueError) when the shape is wrong.
    Unknown keys are kept; numbers inside sessions are not cross-checked.
    """
    return WorkoutPlan.model_validate(value).model_dump(exclude_none=True)
