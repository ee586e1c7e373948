"""Runtime configuration for medcorpus.

Values are read from environment variables prefixed with ``MEDCORPUS_``
(or a local ``.env`` file). Kernels accept an explicit ``Settings`` instance
so tests can tighten or relax thresholds without touching the environment.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Gate thresholds, render limits and retry profiles."""

    model_config = SettingsConfigDict(
        env_prefix="MEDCORPUS_",
        env_file=".env",
        extra="ignore",
    )

    # Completion gate (analyst)
    min_documents_read: int = Field(default=2, ge=0)
    min_searches: int = Field(default=3, ge=0)
    min_expected_sections: int = Field(default=3, ge=0)

    # Rendering limits
    search_context_lines: int = Field(default=2, ge=0)
    search_max_matches_per_section: int = Field(default=10, ge=1)
    search_max_sections: int = Field(default=15, ge=1)
    timeline_events_per_year: int = Field(default=20, ge=1)
    json_preview_chars: int = Field(default=2000, ge=100)

    # Retry profiles (seconds)
    llm_max_retries: int = 8
    llm_base_multiplier: float = 10.0
    llm_min_wait: float = 0.5
    api_max_retries: int = 3
    api_base_multiplier: float = 5.0
    api_min_wait: float = 0.5


settings = Settings()
