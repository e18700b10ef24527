from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

from gradebook.services.gradebook import GradingPolicy


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Grading policy
    assignment_weight: float = 0.6
    quiz_weight: float = 0.4
    passing_threshold: float = 60.0

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or * for dev

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True

    @property
    def cors_origin_list(self) -> list[str]:
        if self.cors_origins == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def grading_policy(self) -> GradingPolicy:
        """Build the class grading policy. Raises ValueError on inconsistent weights."""
        return GradingPolicy.from_weights(
            assignment_weight=self.assignment_weight,
            quiz_weight=self.quiz_weight,
            passing_threshold=self.passing_threshold,
        )


# Global settings instance
settings = Settings()
