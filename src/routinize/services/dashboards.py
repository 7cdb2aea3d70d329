"""Nutrition, sleep, mood and workout dashboards."""

import statistics
from collections import Counter, defaultdict
from datetime import date, timedelta
from pathlib import Path

from ..config import get_settings
from ..db.repositories import (
    MindfulnessRepository,
    MoodRepository,
    NutritionRepository,
    SleepRepository,
    WorkoutLogRepository,
)
from ..models.wellness import (
    MindfulnessLog,
    MindfulnessType,
    MoodEntry,
    NutritionEntry,
    SleepEntry,
)
from ..models.workout_log import WorkoutLog

# Deviation (minutes) at which a consistency score reaches zero
MAX_TIME_DEVIATION = 60
MINUTES_PER_DAY = 24 * 60

WELLNESS_WEIGHTS = {
    "stress": 0.25,
    "mood": 0.25,
    "sleep": 0.25,
    "mindfulness": 0.15,
    "sessions": 0.10,
}
MINDFULNESS_TARGET_MINUTES = 60
SESSIONS_TARGET = 5

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}


def nutrition_summary(entries: list[NutritionEntry]) -> dict:
    """Daily totals, per-day averages and calorie share per macro."""
    per_day: dict[date, dict[str, float]] = defaultdict(
        lambda: {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0}
    )
    for entry in entries:
        totals = per_day[entry.date]
        totals["calories"] += entry.calories
        totals["protein"] += entry.protein
        totals["carbs"] += entry.carbs
        totals["fat"] += entry.fat

    totals = {
        key: round(sum(day[key] for day in per_day.values()), 1)
        for key in ("calories", "protein", "carbs", "fat")
    }
    n_days = len(per_day)
    averages = {key: round(value / n_days, 1) if n_days else 0.0 for key, value in totals.items()}

    macro_kcal = {macro: totals[macro] * kcal for macro, kcal in KCAL_PER_GRAM.items()}
    macro_total = sum(macro_kcal.values())
    macro_split = {
        macro: round(kcal / macro_total * 100, 1) if macro_total else 0.0
        for macro, kcal in macro_kcal.items()
    }

    return {
        "days": {
            day.isoformat(): {k: round(v, 1) for k, v in values.items()}
            for day, values in sorted(per_day.items())
        },
        "totals": totals,
        "daily_average": averages,
        "macro_split": macro_split,
        "entries": len(entries),
    }


def _clock_minutes(value: str) -> int:
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def time_consistency(times: list[str], is_bedtime: bool = False) -> float:
    """Standard deviation in minutes of "HH:MM" clock times.

    Bedtimes before noon count as after midnight so 23:30 and 00:30 are an
    hour apart rather than 23 hours.
    """
    if len(times) <= 1:
        return 0.0
    minutes = []
    for value in times:
        m = _clock_minutes(value)
        if is_bedtime and m < MINUTES_PER_DAY // 2:
            m += MINUTES_PER_DAY
        minutes.append(m)
    return statistics.pstdev(minutes)


def _consistency_score(deviation: float) -> float:
    return max(0.0, 100 - deviation / MAX_TIME_DEVIATION * 100)


def sleep_stats(entries: list[SleepEntry], target_minutes: int | None = None) -> dict:
    """Averages, 7-night trend, sleep debt and schedule consistency.

    Args:
        entries: Sleep entries, any order
        target_minutes: Nightly target (defaults to the configured target)
    """
    if target_minutes is None:
        target_minutes = get_settings().default_sleep_target_minutes

    if not entries:
        return {
            "total_entries": 0,
            "average_duration": 0,
            "average_quality": 0,
            "average_deep_sleep": 0,
            "average_rem_sleep": 0,
            "average_light_sleep": 0,
            "trend": [],
            "sleep_debt": 0,
            "bedtime_consistency": 0,
            "waketime_consistency": 0,
            "consistency_score": 0,
            "sleep_score": 0,
        }

    newest_first = sorted(entries, key=lambda e: e.date, reverse=True)
    recent = newest_first[:7]

    average_duration = statistics.mean(e.duration for e in entries)
    average_quality = statistics.mean(e.quality for e in entries)

    with_phases = [
        e for e in entries
        if e.deep_sleep is not None and e.rem_sleep is not None and e.light_sleep is not None
    ]

    def _phase_average(attr: str) -> float:
        if not with_phases:
            return 0
        return round(statistics.mean(getattr(e, attr) for e in with_phases), 1)

    bedtimes = [e.start_time for e in entries if e.start_time]
    waketimes = [e.end_time for e in entries if e.end_time]
    bedtime_dev = time_consistency(bedtimes, is_bedtime=True)
    waketime_dev = time_consistency(waketimes)
    consistency = (_consistency_score(bedtime_dev) + _consistency_score(waketime_dev)) / 2

    duration_score = min(100.0, average_duration / target_minutes * 100)
    sleep_score = round(duration_score * 0.4 + average_quality * 0.4 + consistency * 0.2)

    return {
        "total_entries": len(entries),
        "average_duration": round(average_duration, 1),
        "average_quality": round(average_quality, 1),
        "average_deep_sleep": _phase_average("deep_sleep"),
        "average_rem_sleep": _phase_average("rem_sleep"),
        "average_light_sleep": _phase_average("light_sleep"),
        "trend": [
            {"date": e.date.isoformat(), "duration": e.duration, "quality": e.quality}
            for e in reversed(recent)
        ],
        "sleep_debt": sum(max(0, target_minutes - e.duration) for e in recent),
        "bedtime_consistency": round(bedtime_dev, 1),
        "waketime_consistency": round(waketime_dev, 1),
        "consistency_score": round(consistency, 1),
        "sleep_score": sleep_score,
    }


def mood_summary(entries: list[MoodEntry]) -> dict:
    if not entries:
        return {
            "entries": 0,
            "average_mood": 0,
            "average_stress": 0,
            "most_common_mood": None,
            "trend": [],
        }
    ordered = sorted(entries, key=lambda e: e.date)
    return {
        "entries": len(entries),
        "average_mood": round(statistics.mean(e.mood_level for e in entries), 2),
        "average_stress": round(statistics.mean(e.stress_level for e in entries), 1),
        "most_common_mood": Counter(e.mood_level for e in entries).most_common(1)[0][0],
        "trend": [
            {"date": e.date.isoformat(), "mood": e.mood_level, "stress": e.stress_level}
            for e in ordered
        ],
    }


def wellness_score(
    moods: list[MoodEntry],
    sleep: list[SleepEntry],
    mindfulness: list[MindfulnessLog],
) -> dict:
    """Composite 0-100 wellness score with its component scores.

    Components are averaged over whatever entries are passed in; missing
    data scores zero for that component. Sleep scores the mean of the
    nightly quality ratings.
    """
    if moods:
        stress = 100 - statistics.mean(e.stress_level for e in moods)
        mood = statistics.mean(e.mood_level for e in moods) * 20
    else:
        stress = mood = 0.0

    sleep_score = statistics.mean(e.quality for e in sleep) if sleep else 0.0

    minutes = sum(log.duration for log in mindfulness)
    mindfulness_score = min(minutes / MINDFULNESS_TARGET_MINUTES * 100, 100.0)
    sessions = sum(
        1
        for log in mindfulness
        if log.exercise_type in (MindfulnessType.BREATHING, MindfulnessType.MEDITATION)
    )
    sessions_score = min(sessions / SESSIONS_TARGET * 100, 100.0)

    components = {
        "stress": round(stress, 1),
        "mood": round(mood, 1),
        "sleep": round(sleep_score, 1),
        "mindfulness": round(mindfulness_score, 1),
        "sessions": round(sessions_score, 1),
    }
    total = sum(components[k] * w for k, w in WELLNESS_WEIGHTS.items())
    return {"score": round(total), "components": components}


def workout_stats(logs: list[WorkoutLog], weeks: float = 1.0) -> dict:
    """Session count, volume and sets per week over ``weeks`` weeks."""
    total_sets = sum(log.total_sets for log in logs)
    durations = [log.duration for log in logs if log.duration]
    return {
        "sessions": len(logs),
        "total_volume": round(sum(log.total_volume for log in logs), 1),
        "total_sets": total_sets,
        "sets_per_week": round(total_sets / weeks, 1) if weeks else 0.0,
        "sessions_per_week": round(len(logs) / weeks, 1) if weeks else 0.0,
        "average_duration": round(statistics.mean(durations), 1) if durations else 0,
    }


async def build_dashboard(
    user_id: str,
    days: int = 7,
    today: date | None = None,
    db_path: Path | None = None,
) -> dict:
    """All dashboard sections for a user over the last ``days`` days."""
    today = today or date.today()
    start = today - timedelta(days=days - 1)

    moods = await MoodRepository(db_path).list_by_user(user_id, start, today)
    sleep = await SleepRepository(db_path).list_by_user(user_id, start, today)
    mindfulness = await MindfulnessRepository(db_path).list_by_user(user_id, start, today)
    nutrition = await NutritionRepository(db_path).list_by_user(user_id, start, today)
    workouts = await WorkoutLogRepository(db_path).list_by_user(user_id, start, today)

    return {
        "user_id": user_id,
        "start": start.isoformat(),
        "end": today.isoformat(),
        "nutrition": nutrition_summary(nutrition),
        "sleep": sleep_stats(sleep),
        "mood": mood_summary(moods),
        "wellness": wellness_score(moods, sleep, mindfulness),
        "workouts": workout_stats(workouts, weeks=days / 7),
    }
