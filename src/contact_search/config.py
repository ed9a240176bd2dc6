"""Configuration models for the contact search engine."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class MatchingConfig(BaseModel):
    """Configures per-field match multipliers and whole-field comparison."""

    prefix_bonus: float = Field(default=1.2, gt=0.0)
    word_boundary_bonus: float = Field(default=1.1, gt=0.0)
    substring_bonus: float = Field(default=1.0, gt=0.0)
    word_prefix_bonus: float = Field(default=1.1, gt=0.0)
    full_field_penalty: float = Field(default=0.8, gt=0.0, le=1.0)
    full_field_min_query_length: int = Field(default=3, ge=1)
    full_field_max_length: int = Field(default=50, ge=1)

    # Simple (non-fuzzy) search: unweighted, with its own fixed threshold
    simple_threshold: float = Field(default=0.6, gt=0.0, le=1.0)
    simple_word_penalty: float = Field(default=0.8, gt=0.0, le=1.0)
    simple_full_field_penalty: float = Field(default=0.7, gt=0.0, le=1.0)


class QueryConfig(BaseModel):
    """Configures the accepted threshold and result-count ranges."""

    min_threshold: float = Field(default=0.1, gt=0.0, le=1.0)
    max_threshold: float = Field(default=1.0, gt=0.0, le=1.0)
    min_results: int = Field(default=1, ge=1)
    max_results: int = Field(default=100, ge=1)

    @model_validator(mode="after")
    def _check_bounds(self) -> "QueryConfig":
        if self.min_threshold > self.max_threshold:
            raise ValueError("min_threshold must not exceed max_threshold")
        if self.min_results > self.max_results:
            raise ValueError("min_results must not exceed max_results")
        return self

    def clamp_threshold(self, value: float) -> float:
        return max(self.min_threshold, min(self.max_threshold, value))

    def clamp_max_results(self, value: int) -> int:
        return max(self.min_results, min(self.max_results, value))
