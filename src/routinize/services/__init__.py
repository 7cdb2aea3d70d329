"""Application services."""

from .avatar import award_experience, customize_avatar, get_avatar, train_phrases
from .corporate import (
    challenge_leaderboard,
    create_challenge,
    create_program,
    join_challenge,
    update_challenge_progress,
)
from .dashboards import (
    build_dashboard,
    mood_summary,
    nutrition_summary,
    sleep_stats,
    wellness_score,
    workout_stats,
)
from .habits import complete_habit, create_habit, habit_completion_rate, is_scheduled
from .profiles import create_profile, get_or_default_profile, get_profile, update_profile

__all__ = [
    "award_experience",
    "build_dashboard",
    "challenge_leaderboard",
    "complete_habit",
    "create_challenge",
    "create_habit",
    "create_profile",
    "create_program",
    "customize_avatar",
    "get_avatar",
    "get_or_default_profile",
    "get_profile",
    "habit_completion_rate",
    "is_scheduled",
    "join_challenge",
    "mood_summary",
    "nutrition_summary",
    "sleep_stats",
    "train_phrases",
    "update_challenge_progress",
    "update_profile",
    "wellness_score",
    "workout_stats",
]
