"""
Settings bundles consumed by every endgame.

Each bundle is a frozen pydantic model, so a bundle is replaced as a whole
and never patched field by field. SettingsBundle is the canonical ordered
triple (endgame, security, tolerances).
"""
import logging
from pathlib import Path
from typing import Any, Mapping, NamedTuple, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

logger = logging.getLogger('Endgame')

ModelT = TypeVar("ModelT", bound=BaseModel)


class EndgameSettings(BaseModel):
    """Sizing of the sample window and the geometric time contraction."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    num_sample_points: int = Field(2, ge=2)
    sample_factor: float = Field(0.5, gt=0.0, lt=1.0)
    min_track_time: float = Field(1e-100, gt=0.0)
    max_num_newton_iterations: int = Field(15, ge=1)


class Tolerances(BaseModel):
    """Convergence thresholds used by concrete strategies."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    newton_before_endgame: float = Field(1e-5, gt=0.0)
    newton_during_endgame: float = Field(1e-6, gt=0.0)
    final_tolerance: float = Field(1e-11, gt=0.0)
    final_tolerance_multiplier: float = Field(100.0, gt=0.0)
    path_truncation_threshold: float = Field(1e5, gt=0.0)


class Security(BaseModel):
    """Divergence guards used by concrete strategies."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: int = Field(0, ge=0)
    max_norm: float = Field(1e5, gt=0.0)


def coerce_settings(value: Union[ModelT, Mapping[str, Any]], model: Type[ModelT]) -> ModelT:
    """Accept a model instance as is, or validate a mapping into one."""
    if isinstance(value, model):
        return value
    if isinstance(value, Mapping):
        return model.model_validate(dict(value))
    raise TypeError(f"expected {model.__name__} or a mapping, got {type(value).__name__}")


class SettingsBundle(NamedTuple):
    endgame: EndgameSettings
    security: Security
    tolerances: Tolerances

    @classmethod
    def build(cls, *, endgame=None, security=None, tolerances=None) -> "SettingsBundle":
        """Keyword-style construction; all three bundles are required."""
        missing = [name for name, value in
                   (("endgame", endgame), ("security", security), ("tolerances", tolerances))
                   if value is None]
        if missing:
            raise TypeError(f"missing settings bundle(s): {', '.join(missing)}")
        return cls(
            endgame=coerce_settings(endgame, EndgameSettings),
            security=coerce_settings(security, Security),
            tolerances=coerce_settings(tolerances, Tolerances),
        )

    @classmethod
    def from_triple(cls, settings) -> "SettingsBundle":
        """Validate an ordered (endgame, security, tolerances) triple."""
        if isinstance(settings, cls):
            return settings
        if len(settings) != 3:
            raise TypeError(f"expected (endgame, security, tolerances), got {len(settings)} items")
        endgame, security, tolerances = settings
        for value, model in ((endgame, EndgameSettings), (security, Security), (tolerances, Tolerances)):
            if not isinstance(value, model):
                raise TypeError(f"expected {model.__name__} in the settings triple, got {type(value).__name__}")
        return cls(endgame, security, tolerances)

    def to_dict(self) -> dict:
        return {
            'endgame': self.endgame.model_dump(),
            'security': self.security.model_dump(),
            'tolerances': self.tolerances.model_dump(),
        }


def default_settings() -> SettingsBundle:
    return SettingsBundle(EndgameSettings(), Security(), Tolerances())


def load_settings(path: Union[str, Path]) -> SettingsBundle:
    """Load settings from a YAML file with optional ``endgame``, ``security``
    and ``tolerances`` sections; absent sections keep their defaults."""
    with open(path, 'r') as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"{path}: top level must be a mapping")

    unknown = set(raw) - {'endgame', 'security', 'tolerances'}
    if unknown:
        raise ConfigurationError(f"{path}: unknown section(s) {sorted(unknown)}")

    try:
        bundle = SettingsBundle.build(
            endgame=raw.get('endgame') or {},
            security=raw.get('security') or {},
            tolerances=raw.get('tolerances') or {},
        )
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"{path}: invalid settings: {e}") from e

    logger.info(f"Loaded endgame settings from {path}")
    return bundle


def save_settings(bundle: SettingsBundle, path: Union[str, Path]) -> Path:
    """Write ``bundle`` in the layout ``load_settings`` reads."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.safe_dump(bundle.to_dict(), f, default_flow_style=False)
    logger.info(f"Saved endgame settings to {path}")
    return path
