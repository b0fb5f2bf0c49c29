################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""High-level configuration wrapper for transform buffering."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .tf_params import TfParams
from .tf_params import TfParamsError


class TfConfigError(Exception):
    """Raised when transform configuration loading or validation fails."""


@dataclass(frozen=True)
class TfConfig:
    """Convenience wrapper around transform parameters."""

    params: TfParams

    def __init__(self, params: TfParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    @classmethod
    def defaults(cls) -> TfConfig:
        """Return a configuration built from default parameters."""
        return cls(TfParams.defaults())

    def validate(self) -> None:
        """Validate parameter invariants."""
        try:
            self.params.validate()
        except TfParamsError as exc:
            raise TfConfigError(str(exc)) from exc

    def tf_topic(self) -> str:
        """Return the configured dynamic transform topic."""
        return self.params.topics.tf

    def tf_static_topic(self) -> str:
        """Return the configured static transform topic."""
        return self.params.topics.tf_static

    def cache_duration_ns(self) -> int:
        """Return the per-edge retention window in nanoseconds."""
        return self.params.buffer.cache_duration_ns

    def slerp_dot_threshold(self) -> float:
        """Return the slerp linear-blend threshold."""
        return self.params.buffer.slerp_dot_threshold

    def quaternion_norm_tolerance(self) -> float:
        """Return the accepted quaternion norm deviation."""
        return self.params.validation.quaternion_norm_tolerance


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path has a YAML extension."""
    suffix: str = Path(os.fspath(path)).suffix.lower()
    return suffix in {".yaml", ".yml"}


def loads_tf_config(text: str) -> TfConfig:
    """Parse a YAML document into a validated configuration."""
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TfConfigError(f"Invalid YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TfConfigError("Configuration root must be a mapping")

    try:
        params: TfParams = TfParams.from_dict(data)
    except TfParamsError as exc:
        raise TfConfigError(str(exc)) from exc
    return TfConfig(params)


def load_tf_config(path: str | os.PathLike[str]) -> TfConfig:
    """Load and validate a configuration from a YAML file."""
    if not is_yaml_path(path):
        raise TfConfigError("Path must end with .yaml or .yml")

    path_obj: Path = Path(os.fspath(path))
    try:
        text: str = path_obj.read_text(encoding="utf-8")
    except OSError as exc:
        raise TfConfigError(f"Failed to read config from {path_obj}") from exc
    return loads_tf_config(text)
