"""
Application configuration
"""

from functools import lru_cache
from typing import List
from pydantic import ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from boligscore.core.exceptions import ConfigurationException


class Settings(BaseSettings):
    """Application settings"""

    # Logging Settings
    LOG_LEVEL: str = "INFO"

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Boligscore"
    VERSION: str = "1.0.0"

    # CORS Settings
    BACKEND_CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Rescoring
    RESCORE_MAX_WORKERS: int = 4
    RESCORE_PARALLEL_THRESHOLD: int = 50  # Smaller catalogs are rescored on the caller thread

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def get_cors_origins(self) -> List[str]:
        """Return the list of allowed CORS origins"""
        if self.BACKEND_CORS_ORIGINS:
            origins = [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]
            return origins if origins else self.CORS_ORIGINS
        return self.CORS_ORIGINS


class ScoringThresholds(BaseSettings):
    """
    Fixed thresholds used by the per-criterion scorers.

    Values may be overridden through ``BOLIGSCORE_*`` environment variables, but are
    read once per process and frozen afterwards.
    """

    MIN_EXPECTED_PRICE_PER_SQM: float = 20_000  # kr
    MAX_EXPECTED_PRICE_PER_SQM: float = 150_000  # kr
    OPTIMAL_AREA_SIZE: float = 120  # m², area score peaks here
    MAX_AREA_SCORE_CAP: float = 250  # m², past this the area score stays flat
    MAX_YEAR_BUILT_BENEFIT: int = 5  # years, newer homes get full marks
    OLDEST_YEAR_PENALTY_START: int = 50  # years, older homes lose points unless condition is high
    MAX_GARDEN_SIZE_BENEFIT: float = 500  # m²

    model_config = SettingsConfigDict(env_prefix="BOLIGSCORE_", frozen=True, extra="ignore")

    @model_validator(mode="after")
    def check_ranges(self) -> "ScoringThresholds":
        if self.MIN_EXPECTED_PRICE_PER_SQM >= self.MAX_EXPECTED_PRICE_PER_SQM:
            raise ValueError("MIN_EXPECTED_PRICE_PER_SQM must be below MAX_EXPECTED_PRICE_PER_SQM")
        if not 0 < self.OPTIMAL_AREA_SIZE < self.MAX_AREA_SCORE_CAP:
            raise ValueError("OPTIMAL_AREA_SIZE must be positive and below MAX_AREA_SCORE_CAP")
        if self.MAX_YEAR_BUILT_BENEFIT >= self.OLDEST_YEAR_PENALTY_START:
            raise ValueError("MAX_YEAR_BUILT_BENEFIT must be below OLDEST_YEAR_PENALTY_START")
        if self.MAX_GARDEN_SIZE_BENEFIT <= 0:
            raise ValueError("MAX_GARDEN_SIZE_BENEFIT must be positive")
        return self


# Create global settings instance
settings = Settings()


@lru_cache()
def get_scoring_thresholds() -> ScoringThresholds:
    """
    Get the process-wide scoring thresholds, loaded on first use
    """
    try:
        return ScoringThresholds()
    except ValidationError as e:
        raise ConfigurationException(
            "Invalid scoring thresholds",
            error_code="INVALID_THRESHOLDS",
            details={"errors": e.errors(include_url=False)},
        ) from e
