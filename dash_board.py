HEADER_TXT = """
## 🏋️ Workout Coach
AI-powered personalized training
"""

FOOTER_TXT = (
    "Plans are generated by a language model. "
    "Consult a professional before starting any workout routine."
)

DASHBOARD_TXT = """
### 🧭 How it works

1. **Build your profile** in four short steps: basic information, fitness profile
   (level, goals, equipment, limitations), workout schedule, and favourite
   exercises / training techniques.
2. **Save the profile** under a name the first time you generate. Saved profiles
   can be loaded, updated or deleted from the profile menu above the form.
3. **Generate a plan.** The profile is turned into a prompt for the model, which
   answers with a structured multi-day plan.
4. **Adjust it in chat.** Open *Modify* and ask for changes ("swap squats for
   lunges", "make day 2 shorter"). When the model returns an updated plan it
   replaces the current one.
5. **Revisit earlier plans** in *History* (the last 20 generated or modified plans),
   rename or delete them, and export any plan as JSON, CSV or TXT.

Everything is stored locally under the data directory; there are no accounts.
"""
