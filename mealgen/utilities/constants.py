from typing import Final

SCHEMA_VERSION: Final[int] = 2

DAY_NAMES: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
MEAL_SLOTS: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")

ACTIVITY_LEVELS: Final[tuple[str, ...]] = (
    "Sedentary",
    "Lightly Active",
    "Moderately Active",
    "Very Active",
    "Extra Active",
)

# Suggestions offered by the profile / plan forms (free tags are accepted too)
HEALTH_GOALS: Final[tuple[str, ...]] = (
    "Weight Management",
    "Muscle Gain",
    "Increasing Energy Levels",
    "Heart Health",
    "Better Digestion",
    "Blood Sugar Control",
)
CUISINES: Final[tuple[str, ...]] = (
    "Italian", "Mexican", "Indian", "Chinese", "Japanese", "Mediterranean", "Thai", "American",
)

UNSAFE_COMBINATIONS_TOOL: Final[str] = "avoidUnsafeCombinations"

GENERIC_TRANSPORT_MESSAGE: Final[str] = (
    "The meal planning service is unavailable right now. Please try again."
)
UNKNOWN_ERROR_MESSAGE: Final[str] = "An unknown error occurred."
