"""Classifier thresholds and rule-selection configuration."""

from __future__ import annotations
from pydantic import BaseModel, Field


class DetectionParams(BaseModel):
    """Tunable thresholds for edge classification."""
    horizontal_tolerance: float = 15.0      # Degrees either side of N-S
    vertical_tolerance: float = 20.0        # Degrees either side of E-W
    connection_tolerance: float = Field(default=1e-5, gt=0)   # Degrees, roughly 1m
    valley_max_angle: float = 100.0         # Average angle below this is concave
    hip_min_angle: float = 130.0            # Average angle above this is convex
    hip_max_angle: float = 160.0            # Upper bound for hips at 3+ connections
    penetration_max_length_ft: float = 10.0
    high_confidence_threshold: int = Field(default=90, ge=0, le=100)


class ClassifierConfig(BaseModel):
    """Controls which rules take part in classification."""
    enabled_rules: list[str] = []        # Empty = use all registered defaults
    disabled_rules: list[str] = []       # Explicitly disable specific rules
