################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for transform buffering."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any
from typing import Mapping

from oasis_tf.timing.time_base import sec_to_ns


# Dynamic transform topic name
TOPIC_TF: str = "tf"
# Static transform topic name
TOPIC_TF_STATIC: str = "tf_static"

# Retention window per frame pair in seconds
BUFFER_CACHE_DURATION_SEC: float = 10.0
# Quaternion dot product above which slerp falls back to a linear blend
BUFFER_SLERP_DOT_THRESHOLD: float = 0.9995

# Max deviation of an incoming quaternion norm from 1
VALIDATION_QUATERNION_NORM_TOLERANCE: float = 1e-3


class TfParamsError(Exception):
    """Raised when transform parameter validation fails."""


def _require_number(value: Any, name: str) -> None:
    """Require a real number, rejecting bools."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TfParamsError(f"{name} must be a number")


def _require_positive(value: float, name: str) -> None:
    """Require a finite positive value."""
    _require_number(value, name)
    if not math.isfinite(value) or value <= 0.0:
        raise TfParamsError(f"{name} must be positive")


@dataclass(frozen=True)
class TopicsParams:
    """Topic names used by the listener and broadcasters."""

    # Dynamic transform topic name
    tf: str = TOPIC_TF
    # Static transform topic name
    tf_static: str = TOPIC_TF_STATIC


@dataclass(frozen=True)
class BufferParams:
    """Per-edge history retention and interpolation parameters."""

    # Retention window per frame pair in seconds
    cache_duration_sec: float = BUFFER_CACHE_DURATION_SEC
    # Quaternion dot product above which slerp falls back to a linear blend
    slerp_dot_threshold: float = BUFFER_SLERP_DOT_THRESHOLD

    @property
    def cache_duration_ns(self) -> int:
        """Retention window in nanoseconds."""
        return sec_to_ns(self.cache_duration_sec)


@dataclass(frozen=True)
class ValidationParams:
    """Record validation parameters for ingestion and broadcast."""

    # Max deviation of an incoming quaternion norm from 1
    quaternion_norm_tolerance: float = VALIDATION_QUATERNION_NORM_TOLERANCE


@dataclass(frozen=True)
class TfParams:
    """Complete configuration tree for transform buffering."""

    topics: TopicsParams
    buffer: BufferParams
    validation: ValidationParams

    @classmethod
    def defaults(cls) -> TfParams:
        """Return the default parameter tree."""
        return cls(
            topics=TopicsParams(),
            buffer=BufferParams(),
            validation=ValidationParams(),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TfParams:
        """Build a parameter tree from nested mappings, filling in defaults.

        Unknown namespaces or keys are rejected so typos do not silently fall
        back to defaults.
        """
        namespaces: dict[str, type] = {
            "topics": TopicsParams,
            "buffer": BufferParams,
            "validation": ValidationParams,
        }
        unknown: list[str] = sorted(set(data) - set(namespaces))
        if unknown:
            raise TfParamsError("Unknown parameter namespaces: " + ", ".join(unknown))

        values: dict[str, Any] = {}
        for name, params_type in namespaces.items():
            section: Any = data.get(name) or {}
            if not isinstance(section, Mapping):
                raise TfParamsError(f"{name} must be a mapping")
            known: set[str] = {field.name for field in fields(params_type)}
            unknown_keys: list[str] = sorted(set(section) - known)
            if unknown_keys:
                raise TfParamsError(
                    f"Unknown {name} parameters: " + ", ".join(unknown_keys)
                )
            try:
                values[name] = params_type(**section)
            except TypeError as exc:
                raise TfParamsError(f"Invalid {name} parameters: {exc}") from exc
        return cls(**values)

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        if not isinstance(self.topics.tf, str) or not self.topics.tf:
            raise TfParamsError("topics.tf must be set")
        if not isinstance(self.topics.tf_static, str) or not self.topics.tf_static:
            raise TfParamsError("topics.tf_static must be set")
        if self.topics.tf == self.topics.tf_static:
            raise TfParamsError("topics.tf and topics.tf_static must differ")

        _require_positive(self.buffer.cache_duration_sec, "buffer.cache_duration_sec")
        _require_number(self.buffer.slerp_dot_threshold, "buffer.slerp_dot_threshold")
        if not 0.0 < self.buffer.slerp_dot_threshold < 1.0:
            raise TfParamsError("buffer.slerp_dot_threshold must be in (0, 1)")

        _require_positive(
            self.validation.quaternion_norm_tolerance,
            "validation.quaternion_norm_tolerance",
        )

    def replace(self, **namespace_overrides: Any) -> TfParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for debugging."""
        return _dataclass_to_dict(self)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    return value
