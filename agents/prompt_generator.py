PLAN_PROMPT_INTRO = (
    "You are an expert personal trainer and fitness coach. "
    "Create a personalized workout plan based on the following user profile:"
)

# Rubric items; {secondary_clause} is filled only when a secondary goal exists.
PLAN_REQUIREMENTS = [
    "Is tailored to their fitness level and goals{secondary_clause}",
    "Uses only the available equipment",
    "Fits within their time constraints",
    "Accounts for any physical limitations",
    "Provides proper exercise progression",
    "Includes warm-up and cool-down recommendations",
    "Incorporates preferred training techniques if specified",
    "Includes detailed execution instructions for each exercise (tempo, speed, form cues)",
    "Provides realistic time estimates for each exercise and total session duration",
]

SECONDARY_GOAL_CLAUSE = " (balancing both primary and secondary goals)"

PLAN_JSON_SCHEMA = """{
  "title": "Plan title",
  "description": "Brief description of the plan approach",
  "sessions": [
    {
      "dayNumber": 1,
      "dayName": "Full Body Strength",
      "totalDurationMinutes": 60,
      "intensity": "moderate",
      "targetMuscleGroups": ["Chest", "Back", "Legs"],
      "exercises": [
        {
          "name": "Exercise name",
          "sets": 3,
          "reps": "8-10",
          "rest": "60 seconds",
          "executionInstructions": "Push up explosively in 1 second, lower slowly for 3 seconds",
          "durationMinutes": 8,
          "notes": "Optional form tips or modifications",
          "demoMedia": {
            "type": "link",
            "url": "https://example.com/exercise-demo"
          }
        }
      ]
    }
  ],
  "tips": [
    "Helpful tip 1",
    "Helpful tip 2"
  ]
}"""

PLAN_IMPORTANT_INSTRUCTIONS = """**Important Instructions:**
- Return ONLY the JSON object, no additional text or markdown formatting
- ALWAYS include "totalDurationMinutes" for each session (calculate based on exercises, sets, rest periods)
- ALWAYS include "intensity" for each session: "low", "moderate", "high", or "very_high"
- ALWAYS include "targetMuscleGroups" array for each session (e.g., ["Chest", "Triceps", "Shoulders"])
- ALWAYS include "durationMinutes" for each exercise (sets x reps x tempo + rest periods)
- ALWAYS include "executionInstructions" for each exercise with specific tempo/speed guidance (e.g., "2 seconds up, 3 seconds down")
- Include "demoMedia" with links to reputable exercise demonstration resources when possible
- Ensure all durations are realistic and account for transition time between exercises
- Prioritize the user's favorite exercises when applicable"""
