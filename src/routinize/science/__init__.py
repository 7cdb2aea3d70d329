"""Training science reference tables."""

from .bodybuilding import (
    ADVANCED_TECHNIQUES,
    DELOAD_STRATEGIES,
    METHOD_TECHNIQUES,
    PROGRESSION_METHODS,
    get_exercise_variants,
    get_optimal_volume,
    get_recommended_deload,
    get_recommended_rest,
    get_recommended_techniques,
    is_technique_applicable,
)
from .mesocycles import (
    LONG_TERM_PLANS,
    MESOCYCLE_CONFIGS,
    MesocycleType,
    get_recommended_long_term_plan,
    get_recommended_mesocycle,
)

__all__ = [
    "ADVANCED_TECHNIQUES",
    "DELOAD_STRATEGIES",
    "get_exercise_variants",
    "get_optimal_volume",
    "get_recommended_deload",
    "get_recommended_long_term_plan",
    "get_recommended_mesocycle",
    "get_recommended_rest",
    "get_recommended_techniques",
    "is_technique_applicable",
    "LONG_TERM_PLANS",
    "MESOCYCLE_CONFIGS",
    "MesocycleType",
    "METHOD_TECHNIQUES",
    "PROGRESSION_METHODS",
]
