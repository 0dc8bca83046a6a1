"""Static constants, thresholds and canned copy for fit-cli."""

from __future__ import annotations

DAY_MS = 24 * 60 * 60 * 1000
HOUR_MS = 60 * 60 * 1000

AI_BASE_URL = "https://api.openai.com/v1"
AI_MODEL = "gpt-4o-mini"
AI_TEMPERATURE = 0.7
AI_MAX_TOKENS = 500

DEFAULT_WEEKLY_GOAL = 4
RECOVERY_SUMMARY_LIMIT = 10
RECOVERY_MIN_REFRESH_SECONDS = 30
CHAT_HISTORY_LIMIT = 10
TITLE_MAX_LENGTH = 30

# (upper bound in minutes, fatigue points, summary label); last row has no bound.
INTENSITY_BANDS = [
    (20, 25, "light"),
    (40, 50, "moderate"),
    (60, 75, "hard"),
    (None, 100, "intense"),
]

FATIGUE_DECAY_DAYS = 2.0
FATIGUE_MAX = 100.0

REST_FATIGUE_THRESHOLD = 70
LIGHT_FATIGUE_THRESHOLD = 45
MODERATE_FATIGUE_THRESHOLD = 25
REST_CONSECUTIVE_DAYS = 3
LIGHT_CONSECUTIVE_DAYS = 2

RECOVERY_STATUSES = ("rest", "light", "moderate", "ready")

STATUS_LABELS = {
    "rest": "Rest",
    "light": "Light",
    "moderate": "Moderate",
    "ready": "Ready",
}

DEFAULT_RECOMMENDATION = {
    "status": "ready",
    "title": "Ready to Train! 💪",
    "message": "You're doing great! Keep up the good work.",
    "tips": ["Stay hydrated", "Warm up properly", "Listen to your body"],
    "insights": "Your training is on track.",
}

FALLBACK_COPY = {
    "rest": {
        "title": "Rest Day Recommended 😴",
        "message_streak": (
            "You've trained {days} days straight. Your muscles need time to "
            "repair and grow stronger."
        ),
        "message_fatigue": (
            "Your body is showing signs of accumulated fatigue. Rest now to "
            "prevent overtraining."
        ),
        "tips": [
            "Focus on quality sleep (7-9 hours)",
            "Stay hydrated with water and electrolytes",
            "Light stretching or foam rolling is okay",
            "Eat protein-rich foods for recovery",
        ],
        "insights": "Recovery is when your muscles actually grow stronger!",
    },
    "light": {
        "title": "Light Activity Day 🚶",
        "message": (
            "Your body is still recovering from recent training. A light session "
            "will promote blood flow without adding stress."
        ),
        "tips": [
            "20-30 minute walk or light jog",
            "Yoga or mobility work",
            "Swimming for active recovery",
            "Avoid heavy lifting today",
        ],
        "insights": "Active recovery can speed up the healing process.",
        "suggested_workout": "Yoga or stretching session",
    },
    "moderate": {
        "title": "Moderate Training OK 💪",
        "message": (
            "You're recovering well! Target different muscle groups than "
            "yesterday for optimal results."
        ),
        "tips": [
            "Work different muscle groups",
            "Keep intensity at 70-80%",
            "Extra focus on warm-up",
            "Monitor how you feel mid-workout",
        ],
        "insights": "Training variety helps prevent overuse injuries.",
        "suggested_workout": "Upper body if you did legs, or vice versa",
    },
    "ready": {
        "title": "Ready to Crush It! 🔥",
        "message_new": (
            "No recent workouts detected. Today is a perfect day to start your "
            "fitness journey!"
        ),
        "message_recovered": (
            "You're fully recovered and primed for an intense session. Make it count!"
        ),
        "tips": [
            "Perfect day for heavy compound lifts",
            "Try high-intensity intervals",
            "Push your limits safely",
            "Fuel up with carbs pre-workout",
        ],
        "insights": "Your body is ready to adapt and grow stronger!",
        "suggested_workout": "Full body strength or HIIT session",
    },
}

RECOVERY_SYSTEM_PROMPT = (
    "You are a professional fitness coach. Always respond with valid JSON only, "
    "no markdown formatting."
)

RECOVERY_PROMPT_TEMPLATE = """You are a professional fitness coach and recovery specialist. Analyze the following workout history and provide personalized recovery recommendations.

WORKOUT HISTORY (Last {limit} workouts):
{summary}

USER: {user_name}
CURRENT DATE: {current_date}

Based on exercise science principles, analyze:
1. Workout frequency and consistency
2. Intensity patterns
3. Recovery time between sessions
4. Potential overtraining signs

Respond with a JSON object (no markdown, just raw JSON):
{{
  "status": "rest" | "light" | "moderate" | "ready",
  "title": "Short motivating title with emoji (max {title_max} chars)",
  "message": "2-3 sentence personalized recommendation explaining why",
  "tips": ["tip1", "tip2", "tip3"],
  "insights": "One sentence insight about their training pattern",
  "suggestedWorkout": "Optional: specific workout type if status is not 'rest'"
}}

Status meanings:
- "rest": Complete rest day needed (high fatigue, overtraining risk)
- "light": Light activity only (walking, stretching, yoga)
- "moderate": Can workout but at reduced intensity
- "ready": Fully recovered, can do intense workout"""

APP_CONTEXT = """
You are FitBot, a helpful AI assistant for the "Track Your Fitness" app. You help users understand and use the app's features.

## APP FEATURES:

### 1. WORKOUTS
- Create custom workouts with exercises
- Track sets, reps, and weights
- Mark workouts as completed
- Favorite workouts for quick access
- View workout history organized by month

### 2. EXERCISES
- Add multiple exercises to each workout
- Track sets with reps and weight
- Mark individual sets as completed
- Exercise templates by category (Chest, Back, Legs, Shoulders, Arms, Core, Cardio)
- Personal records are automatically tracked

### 3. PROGRESS TRACKING
- View total workouts completed
- Track total minutes exercised
- Current workout streak (consecutive days)
- Weekly progress with goal tracking (default: 4 workouts/week)
- Personal records for each exercise

### 4. AI RECOVERY RECOMMENDATIONS
- Analyzes your workout history using AI
- Provides personalized rest day suggestions
- Four status levels: Ready, Moderate, Light, Rest
- Shows a fatigue meter and action tips
- Falls back to built-in rules when the AI service is unavailable

### 5. SETTINGS
- Weekly goal and measurement units
- AI model and API key configuration

Be friendly, helpful, and concise. If asked about features not in the app, suggest it as a great idea for future updates!
"""

CHAT_OFFLINE_RESPONSE = (
    "I'm FitBot! 🤖 I can help you with the app, but I'm currently in offline mode. "
    "Here are some tips:\n\n"
    "• Log workouts with their duration and mark them completed\n"
    "• Run `fit stats` to see totals, streak and weekly goal progress\n"
    "• Run `fit recover` for a recovery recommendation\n"
    "• Run `fit records` to review your personal records"
)
CHAT_OFFLINE_ERROR = "API key not configured"
CHAT_CONNECTION_RESPONSE = (
    "Sorry, I'm having trouble connecting right now. Try asking me again in a moment! 🔄"
)
CHAT_EMPTY_RESPONSE = "I didn't quite catch that. Could you rephrase your question? 🤔"
CHAT_EMPTY_ERROR = "Empty response"
