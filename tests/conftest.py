import copy

import pytest

from storage import LocalStorage
from stores import app_stores

SAMPLE_PROFILE = {
    "gender": "female",
    "age": 28,
    "height": 165,
    "weight": 60,
    "fitnessLevel": "intermediate",
    "goal": "strength",
    "equipment": ["dumbbells", "pull_up_bar"],
    "workoutPreferenceMode": "sessions_per_week",
    "sessionsPerWeek": 3,
    "timePerSession": 45,
    "limitations": "",
    "preferredTechniques": [],
    "favoriteExercises": [],
}

SAMPLE_PLAN = {
    "title": "Strength Builder",
    "description": "Three days of compound lifts.",
    "sessions": [
        {
            "dayNumber": 1,
            "dayName": "Upper Body",
            "targetMuscleGroups": ["chest", "back"],
            "totalDurationMinutes": 45,
            "intensity": "moderate",
            "exercises": [
                {
                    "name": "Dumbbell Bench Press",
                    "sets": 3,
                    "reps": "8-10",
                    "rest": "90 seconds",
                    "durationMinutes": 10,
                    "executionInstructions": "Lower under control, press up explosively.",
                    "notes": "Keep shoulder blades retracted",
                },
                {
                    "name": "Pull-ups",
                    "sets": 3,
                    "reps": "AMRAP",
                    "rest": "2 minutes",
                },
            ],
        }
    ],
    "tips": ["Warm up first", "Sleep well"],
}


class FakeClient:
    """Stands in for OpenAIStyleClient: records requests, replays a canned reply."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def chat(self, messages, **kwargs):
        self.calls.append({"messages": messages, "kwargs": kwargs})
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture(autouse=True)
def isolated_stores(tmp_path):
    """Point the app-wide stores at a temp file for every test."""
    previous = app_stores.storage
    app_stores.use_storage(LocalStorage(tmp_path / "app_storage.json"))
    yield app_stores
    app_stores.use_storage(previous)


@pytest.fixture
def sample_profile():
    return copy.deepcopy(SAMPLE_PROFILE)


@pytest.fixture
def sample_plan():
    return copy.deepcopy(SAMPLE_PLAN)


@pytest.fixture
def fake_client():
    return FakeClient
