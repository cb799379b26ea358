"""Application configuration using Pydantic Settings."""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    APP_NAME: str = "Pick3 Lottery Analyzer"
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_DIR: Path = Path("./logs")

    # Snapshot of draws / predictions / validations
    DATA_FILE: Path = Path("./data/pick3_state.json")
    PERSIST_ENABLED: bool = False

    # Engine
    DEFAULT_WINDOW: int = 30
    MIN_WINDOW: int = 5
    MAX_WINDOW: int = 200
    MIN_DRAWS: int = 5
    HIT_THRESHOLD: int = 3
    PATTERN_LOOKBACK: int = 300
    MARKOV_LOOKBACK: int = 60
    FOLLOW_LOOKBACK: int = 80
    COMBINED_TOP_N: int = 10

    # Validation / statistics
    VALIDATION_HISTORY_LIMIT: int = 200
    RECENT_ACCURACY_SPAN: int = 20
    BACKTEST_TEST_SIZE: int = 50

    # Remote sync
    SYNC_ENABLED: bool = False
    SYNC_URL: str = ""
    SYNC_INTERVAL_SECONDS: int = 60
    SYNC_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
