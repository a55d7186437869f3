"""Runtime configuration for gridcoder."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="GRIDCODER_", env_file=".env", extra="ignore")

    app_name: str = "gridcoder"
    log_level: str = "INFO"
    time_limit_ms: int = Field(default=2000, gt=0, description="Wall-clock budget for one script run.")
    max_steps: int = Field(
        default=200_000,
        gt=0,
        description="Interpreter line/call events allowed for one script run.",
    )
    levels_path: str = Field(default="levels.json", description="Default file for level export/import.")


settings = Settings()
