"""
Default habit set inserted when a fresh store is initialized.
"""

DEFAULT_HABITS = [
    {
        "name": "Meditation",
        "icon": "🧘",
        "color": "#6366F1",
        "description": "Daily mindfulness practice",
    },
    {
        "name": "Daily Impact Stories",
        "icon": "✍️",
        "color": "#F59E0B",
        "description": "Creative writing session",
    },
    {
        "name": "Critical Thinking",
        "icon": "🧠",
        "color": "#10B981",
        "description": "Analytical thinking exercises",
    },
    {
        "name": "Supplements",
        "icon": "💊",
        "color": "#EF4444",
        "description": "Daily supplement routine",
    },
    {
        "name": "Log Food",
        "icon": "🍎",
        "color": "#8B5CF6",
        "description": "Track daily nutrition",
    },
]
