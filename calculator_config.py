"""Settings for the calculator command line, read from STRING_CALCULATOR_* variables."""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class CalculatorConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STRING_CALCULATOR_",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        frozen=True,
    )

    column: str = Field(default="expression", description="CSV column holding the expressions")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level
