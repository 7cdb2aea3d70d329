"""Request bodies for the JSON API. Fields accept camelCase or snake_case."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..generators.routine_generator import PeriodizationType
from ..models.habits import HabitCategory
from ..models.routine import SplitType
from ..models.user_profile import TrainingGoal, TrainingLevel
from ..models.wellness import MealType, MindfulnessType


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileCreate(ApiModel):
    user_id: str = Field(min_length=1)
    full_name: str = "User"
    avatar_url: str | None = None
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    goal: TrainingGoal | None = None
    level: TrainingLevel | None = None


class ProfileUpdate(ApiModel):
    full_name: str | None = None
    avatar_url: str | None = None
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    goal: TrainingGoal | None = None
    level: TrainingLevel | None = None


class GenerateRoutineRequest(ApiModel):
    user_id: str = Field(min_length=1)
    save: bool = False
    seed: int | None = None
    name: str = "Advanced Routine"
    description: str = ""
    level: TrainingLevel = TrainingLevel.INTERMEDIATE
    goal: TrainingGoal = TrainingGoal.HYPERTROPHY
    split: SplitType = SplitType.PPL
    frequency: int = 4
    duration_weeks: int = 8
    include_deload: bool = True
    deload_frequency: int = 4
    deload_strategy: str | None = None
    techniques: list[str] = []
    method_techniques: list[str] = []
    progression_method: str | None = None
    use_variants: bool = False
    use_alternatives: bool = True
    alternatives_per_exercise: int = 2
    use_periodization: bool = False
    periodization_type: PeriodizationType = PeriodizationType.UNDULATING
    use_long_term_plan: bool = False
    long_term_plan: str | None = None
    start_date: dt.date | None = None


class RoutineUpdate(ApiModel):
    name: str | None = None
    description: str | None = None
    is_active: bool | None = None


class CompletedSetIn(ApiModel):
    exercise_name: str
    reps: int = Field(ge=0)
    weight: float = Field(default=0.0, ge=0)
    rir: int | None = Field(default=None, ge=0)
    exercise_id: int | None = None


class WorkoutLogCreate(ApiModel):
    user_id: str
    date: dt.date
    completed_sets: list[CompletedSetIn] = []
    routine_id: str | None = None
    day_id: str | None = None
    duration: int = Field(default=0, ge=0)
    notes: str = ""
    perceived_effort: int | None = Field(default=None, ge=1, le=10)


class HabitCreate(ApiModel):
    user_id: str
    title: str
    description: str = ""
    category: HabitCategory = HabitCategory.HEALTH
    frequency: list[str] = ["daily"]
    time_of_day: str | None = None
    duration: int = Field(default=0, ge=0)


class HabitCompletion(ApiModel):
    date: dt.date | None = None


class MoodCreate(ApiModel):
    user_id: str
    date: dt.date
    mood_level: int = Field(ge=1, le=5)
    stress_level: int = Field(default=50, ge=0, le=100)
    sleep_hours: float | None = Field(default=None, ge=0, le=24)
    notes: str = ""


class SleepCreate(ApiModel):
    user_id: str
    date: dt.date
    duration: int = Field(ge=0)
    start_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    end_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    quality: int = Field(default=50, ge=0, le=100)
    deep_sleep: int | None = None
    rem_sleep: int | None = None
    light_sleep: int | None = None
    hrv: float | None = None
    resting_heart_rate: float | None = None
    notes: str = ""


class MindfulnessCreate(ApiModel):
    user_id: str
    date: dt.date
    duration: int = Field(ge=0)
    exercise_type: MindfulnessType = MindfulnessType.MEDITATION
    notes: str = ""


class NutritionCreate(ApiModel):
    user_id: str
    date: dt.date
    food_name: str
    meal_type: MealType = MealType.SNACK
    calories: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)
    notes: str = ""


class ProgramCreate(ApiModel):
    company_id: str
    name: str
    description: str = ""
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    goals: list[str] = []


class ChallengeCreate(ApiModel):
    title: str
    description: str = ""
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    challenge_type: str = "steps"
    target_value: float | None = None
    reward: str | None = None


class ChallengeJoin(ApiModel):
    user_id: str


class ChallengeProgress(ApiModel):
    user_id: str
    value: float


class AvatarCustomization(ApiModel):
    name: str | None = None
    personality: str | None = None
    specialization: str | None = None
    customization: dict | None = None


class PhraseTraining(ApiModel):
    category: str
    phrases: list[str]


class ExperienceAward(ApiModel):
    points: int
