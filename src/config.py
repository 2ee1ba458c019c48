"""
Application Configuration Module.

Manages application settings and environment variables using Pydantic for validation.
Provides centralized configuration management with type safety and validation.

Features:
- Environment variable loading and validation
- Secure credential management
- Scoring weight validation
- Path normalization for output directories
"""

import os
from typing import Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logger import LogManager
from analyzers.models import ScoringWeights


class Settings(BaseSettings):
    """
    Application configuration settings with validation.

    Manages and validates all application settings including:
    - Application identification and logging
    - GitHub authentication and organization
    - Sampling and truncation knobs
    - Score normalization and weights
    - OpenAI configuration
    - Output configuration

    Attributes:
        app_name (str): Name of the application
        dev (bool): Development mode flag, enables console logging
        github_organization (str): Organization whose repositories are ranked
        github_token (Optional[SecretStr]): GitHub API authentication token
        openai_api_key (Optional[SecretStr]): OpenAI API key
        ai_based (bool): Whether to score samples with the LLM evaluator
        sample_size (int): Commits sampled per repository
        diff_lines_limit (int): Diff line budget per sampled commit
        commit_count_cap (int): Commit count normalization cap
    """

    # Application settings
    app_name: str = Field(default="CommitRanker", description="Application name")
    dev: bool = Field(default=False, description="Development mode")
    log_dir: str = Field(default="logs", description="Logging directory")
    log_level: int = Field(default=20, description="Logging level, default info")

    # GitHub configuration
    github_organization: str = Field(
        ..., min_length=1, description="GitHub organization to rank"
    )
    github_token: Optional[SecretStr] = Field(
        default=None, description="GitHub token, unauthenticated when absent"
    )
    github_page_size: int = Field(
        default=100, ge=1, le=100, description="Items requested per listing page"
    )

    # OpenAI configuration
    openai_api_key: Optional[SecretStr] = Field(
        default=None, description="OpenAI API key"
    )
    openai_llm_model: str = Field(default="gpt-4o-mini", description="OpenAI LLM model")
    openai_encoding_name: str = Field(default="o200k_base", description="Encoding name")
    openai_max_prompt_tokens: int = Field(
        default=30000, description="Prompt size that triggers a warning"
    )

    # AI Analysis configuration
    ai_based: bool = Field(default=True, description="Use the LLM evaluator")

    # Sampling configuration
    sample_size: int = Field(default=5, ge=0, description="Commits sampled per repo")
    diff_lines_limit: int = Field(
        default=100, description="Diff lines kept per commit, <= 0 keeps everything"
    )
    early_stop_threshold: int = Field(
        default=0,
        ge=0,
        description="Stop listing commit identifiers past this many, 0 disables",
    )
    early_stop_max_sample: int = Field(
        default=10, ge=0, description="Early stop applies only to samples this small"
    )

    # Scoring configuration
    commit_count_cap: int = Field(
        default=1000, gt=0, description="Commit count normalization cap"
    )
    commit_count_weight: float = Field(default=0.2, ge=0.0)
    technical_score_weight: float = Field(default=0.4, ge=0.0)
    message_score_weight: float = Field(default=0.4, ge=0.0)

    # Output configuration
    report_output_dir: str = Field(
        default="reports", description="Report output directory"
    )
    generate_pdf: bool = Field(default=True, description="Write the PDF report")
    generate_chart: bool = Field(default=True, description="Write the ranking chart")

    @property
    def weights(self) -> ScoringWeights:
        """
        Get the scoring weights and normalization cap as a value object.

        Returns:
            ScoringWeights: Weights consumed by the score aggregator
        """
        return ScoringWeights(
            commit_count=self.commit_count_weight,
            technical=self.technical_score_weight,
            message=self.message_score_weight,
            commit_count_cap=self.commit_count_cap,
        )

    @field_validator("report_output_dir")
    def ensure_absolute_path(cls, v: str) -> str:
        """
        Ensure report directory path is absolute.

        Args:
            v (str): Directory path to validate

        Returns:
            str: Absolute path to report directory
        """
        if not os.path.isabs(v):
            return os.path.abspath(v)
        return v

    @model_validator(mode="after")
    def check_weights(self) -> "Settings":
        total = (
            self.commit_count_weight
            + self.technical_score_weight
            + self.message_score_weight
        )
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"score weights must sum to 1.0, got {total}")
        return self

    # Configure env file loading
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )


# Create global settings instance
settings = Settings()

# Initialize logging configuration
logger = LogManager(
    app_name=settings.app_name.lower(),
    log_dir=settings.log_dir,
    development=settings.dev,
    level=settings.log_level,
).logger
