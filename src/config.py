import os
from enum import Enum
from typing import Final


class TopicIcon(Enum):
    # Enum Member = ("Topic Title", "Icon")
    MATH = ("Mathematics", "🔢")
    MARVEL = ("Marvel Super Heroes", "🦸")
    SCIENCE = ("Science", "🔬")

    def __init__(self, title: str, icon: str):
        self.title = title
        self.icon = icon

    @classmethod
    def get_icon(cls, title: str) -> str:
        """Returns the icon for a given topic title, or a default."""
        # "Science!" and "science" both match "Science"
        normalized = "".join(c for c in title if c.isalnum() or c.isspace())
        normalized = normalized.strip().lower()
        for topic in cls:
            if topic.title.lower() == normalized:
                return topic.icon
        return AppConfig.DEFAULT_ICON


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class AppConfig:
    # --- App Identity ---
    APP_TITLE = "iQuiz"
    DEFAULT_ICON: Final[str] = "❓"

    # --- Data Source ---
    DEFAULT_SOURCE_URL: Final[str] = os.getenv(
        "IQUIZ_SOURCE_URL", "http://tednewardsandbox.site44.com/questions.json"
    )
    FETCH_TIMEOUT_SECONDS: Final[float] = _env_float("IQUIZ_FETCH_TIMEOUT", 10.0)

    # --- Local Storage ---
    DB_PATH: Final[str] = os.getenv("IQUIZ_DB_PATH", "data/iquiz.db")
    CACHE_PATH: Final[str] = os.getenv("IQUIZ_CACHE_PATH", "data/quiz_cache.json")
    SEED_PATH: Final[str] = "data/sample_quiz.json"

    # Preference keys
    SOURCE_URL_KEY: Final[str] = "source_url"

    # --- Scoring Bands (lower bound inclusive) ---
    EXCELLENT_THRESHOLD: Final[float] = 0.9
    GOOD_THRESHOLD: Final[float] = 0.7
    FAIR_THRESHOLD: Final[float] = 0.5

    # --- Observability ---
    METRICS_PORT: Final[int] = _env_int("IQUIZ_METRICS_PORT", 8000)
    SERVICE_NAME: Final[str] = "iquiz-app"
