"""Configuration loading for the conflict map."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class ClusterPlotConfig(BaseModel):
    width: int = 600
    height: int = 300
    padding: float = 20.0
    radius_divisor: float = 10.0  # k in radius = clicks / k
    min_radius: float = 6.0
    max_radius: float = 24.0
    core_radius: float = 2.0
    grid_fractions: list[float] = Field(default_factory=lambda: [0.0, 0.25, 0.5, 0.75, 1.0])
    edge_dash: int = 6
    edge_gap: int = 4


class TrendPlotConfig(BaseModel):
    width: int = 600
    height: int = 200
    padding: float = 20.0
    domain_pad: float = 1.0
    line_width: int = 2
    glow_width: int = 8
    glow_blur: float = 3.0
    marker_radius: float = 4.0


class SelectionConfig(BaseModel):
    hit_threshold: float = 20.0


class PulseConfig(BaseModel):
    min_radius: float = 4.0
    max_radius: float = 16.0
    volatility_cap: float = 1.0  # volatility at which the pulse stops growing


class Config(BaseModel):
    output_dir: str = "out"
    plot: ClusterPlotConfig = Field(default_factory=ClusterPlotConfig)
    trend: TrendPlotConfig = Field(default_factory=TrendPlotConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    pulse: PulseConfig = Field(default_factory=PulseConfig)

    @property
    def resolved_output_dir(self) -> Path:
        """Resolve output_dir relative to project root."""
        p = Path(self.output_dir)
        if p.is_absolute():
            return p
        return _project_root() / p


def _project_root() -> Path:
    """Return the cannibalmap project root directory."""
    return Path(__file__).parent.parent


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
