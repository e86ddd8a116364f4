"""
config.py — Application settings read from environment variables.
All variables use the EXPR_TREE_ prefix.
"""
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Fraction rendering
    max_denominator: int = Field(default=10_000, gt=0)
    fraction_tolerance: float = Field(default=1e-6, gt=0)

    # Decimal rendering
    decimal_places: int = Field(default=2, ge=0)

    # Evaluation policies
    division_policy: Literal["suppress", "raise"] = "suppress"
    unbound_policy: Literal["zero", "raise"] = "zero"

    # Arena (None = no depth bound)
    max_depth: Optional[int] = Field(default=None, gt=0)

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="EXPR_TREE_", env_file=".env", extra="ignore")
