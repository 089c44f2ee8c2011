"""Configuration models for issueplan."""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field

from issueplan.models import Priority
from issueplan.utils.config_loader import load_yaml_with_env


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class PriorityWeights(BaseModel):
    """
    Numeric weight for each priority class.

    Weights must be non-negative. Callers usually keep them descending
    (P0 >= P1 >= P2 >= P3) but no ordering is enforced.

    Example:
    ```yaml
    weights:
      P0: 100
      P1: 75
      P2: 50
      P3: 25
    ```
    """

    model_config = {"frozen": True}

    P0: float = Field(default=100, ge=0)
    P1: float = Field(default=75, ge=0)
    P2: float = Field(default=50, ge=0)
    P3: float = Field(default=25, ge=0)

    def as_dict(self) -> Dict[Priority, float]:
        return {priority: getattr(self, priority.value) for priority in Priority}


class AnalyzerConfig(BaseModel):
    """
    Settings for a full analysis run.

    The scoring knobs only influence ranking (execution order, ready queue,
    in-group presentation). They never change the critical path or the
    group partition, which depend on effort and edges alone.

    Example:
    ```yaml
    weights:
      P0: 100
      P1: 75
      P2: 50
      P3: 25
    critical_path_bonus: 50
    dependent_multiplier: 10
    quick_win_bonus: 15
    quick_win_threshold: 4
    log_level: INFO
    ```
    """

    model_config = {"frozen": True}

    weights: PriorityWeights = Field(default_factory=PriorityWeights)
    critical_path_bonus: float = Field(
        default=50, ge=0, description="Score bonus for issues on the critical path"
    )
    dependent_multiplier: float = Field(
        default=10, ge=0, description="Score added per direct dependent"
    )
    quick_win_bonus: float = Field(
        default=15, ge=0, description="Score bonus for low-effort issues"
    )
    quick_win_threshold: float = Field(
        default=4, ge=0, description="Effort at or below which an issue is a quick win"
    )
    log_level: LogLevel = LogLevel.INFO
    structured_logging: bool = False


def load_analyzer_config(path: str) -> AnalyzerConfig:
    """Load an AnalyzerConfig from a YAML file (env vars substituted)."""
    data = load_yaml_with_env(path)
    return AnalyzerConfig.model_validate(data)
