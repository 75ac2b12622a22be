"""
config.py — application configuration from environment variables.
All variables use the EXPRCALC_ prefix.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = "WARNING"

    # Significant digits used when printing values
    precision: int = Field(default=12, ge=1, le=17)

    model_config = SettingsConfigDict(env_prefix="EXPRCALC_", env_file=".env", extra="ignore")
