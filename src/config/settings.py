"""
Environment-specific configuration settings.

Matching weights and thresholds are kept in their own dataclass so they can be
tuned without touching the scoring code.
"""

from dataclasses import dataclass, field
import os
from typing import Optional


FALLBACK_MESSAGE = "Not sure, please contact staff."


@dataclass(frozen=True)
class MatchingConfig:
    """Weights and cut-offs used by the FAQ matcher."""

    question_weight: float = 0.6
    answer_weight: float = 0.2
    tag_weight: float = 0.2

    # Candidates below this never reach the caller.
    confidence_threshold: float = 0.3
    # Fraction of the top score that still counts as a "close" match.
    ambiguity_ratio: float = 0.8
    max_results: int = 3

    min_token_length: int = 3
    fallback_message: str = FALLBACK_MESSAGE

    @classmethod
    def from_environment(cls) -> "MatchingConfig":
        """Apply optional threshold overrides from environment variables."""
        defaults = cls()
        return cls(
            confidence_threshold=float(
                os.environ.get("MATCH_CONFIDENCE_THRESHOLD", defaults.confidence_threshold)
            ),
            ambiguity_ratio=float(
                os.environ.get("MATCH_AMBIGUITY_RATIO", defaults.ambiguity_ratio)
            ),
            max_results=int(os.environ.get("MATCH_MAX_RESULTS", defaults.max_results)),
        )


def log_level_from_environment() -> str:
    """LOG_LEVEL when set, otherwise WARNING in prod and INFO elsewhere."""
    default = "WARNING" if os.environ.get("ENVIRONMENT", "dev") == "prod" else "INFO"
    return os.environ.get("LOG_LEVEL", default)


@dataclass
class Settings:
    """Application settings with local-friendly defaults."""

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    # Database Configuration
    database_url: Optional[str] = None
    db_secret_arn: Optional[str] = None
    sql_echo: bool = False
    db_pool_size: int = 1
    db_max_overflow: int = 2

    # Snapshot cache for /faqs/ask (0 disables)
    snapshot_cache_ttl_seconds: int = 30

    default_lang: str = "en"
    matching: MatchingConfig = field(default_factory=MatchingConfig)

    @property
    def database_configured(self) -> bool:
        return bool(self.database_url or self.db_secret_arn)

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        env = os.environ.get("ENVIRONMENT", "dev")
        common = dict(
            environment=env,
            database_url=os.environ.get("DATABASE_URL") or None,
            db_secret_arn=os.environ.get("DB_SECRET_ARN") or None,
            snapshot_cache_ttl_seconds=int(
                os.environ.get("SNAPSHOT_CACHE_TTL_SECONDS", 30)
            ),
            matching=MatchingConfig.from_environment(),
        )

        # Production overrides
        if env == "prod":
            return cls(
                log_level=log_level_from_environment(),
                sql_echo=False,
                db_pool_size=2,
                db_max_overflow=4,
                **common,
            )

        return cls(
            log_level=log_level_from_environment(),
            sql_echo=env == "development",
            **common,
        )
