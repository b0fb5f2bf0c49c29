################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for transform parameters."""

from __future__ import annotations

import dataclasses
from typing import Any

import pytest

from oasis_tf.config.tf_params import BUFFER_CACHE_DURATION_SEC
from oasis_tf.config.tf_params import TfParams
from oasis_tf.config.tf_params import TfParamsError


def test_defaults_validate() -> None:
    """Default parameters should pass validation."""
    params: TfParams = TfParams.defaults()
    params.validate()
    assert params.buffer.cache_duration_sec == BUFFER_CACHE_DURATION_SEC
    assert params.buffer.cache_duration_ns == 10_000_000_000


def test_from_dict_overrides() -> None:
    """Nested overrides should replace defaults."""
    params: TfParams = TfParams.from_dict(
        {"buffer": {"cache_duration_sec": 2.5}, "topics": {"tf": "robot/tf"}}
    )
    assert params.buffer.cache_duration_ns == 2_500_000_000
    assert params.topics.tf == "robot/tf"
    assert params.topics.tf_static == "tf_static"


@pytest.mark.parametrize(
    "data",
    [
        {"bogus": {}},
        {"buffer": {"cache_seconds": 1.0}},
        {"buffer": [1]},
    ],
)
def test_from_dict_rejects_unknown(data: dict[str, Any]) -> None:
    """Unknown namespaces or keys should raise an error."""
    with pytest.raises(TfParamsError):
        TfParams.from_dict(data)


def test_validate_rejects_bad_values() -> None:
    """Invalid values should raise an error."""
    defaults: TfParams = TfParams.defaults()
    bad: list[TfParams] = [
        defaults.replace(
            buffer=dataclasses.replace(defaults.buffer, cache_duration_sec=0.0)
        ),
        defaults.replace(
            buffer=dataclasses.replace(defaults.buffer, slerp_dot_threshold=1.5)
        ),
        defaults.replace(
            buffer=dataclasses.replace(defaults.buffer, cache_duration_sec="10")
        ),
        defaults.replace(
            topics=dataclasses.replace(defaults.topics, tf_static="tf")
        ),
        defaults.replace(topics=dataclasses.replace(defaults.topics, tf="")),
        defaults.replace(
            validation=dataclasses.replace(
                defaults.validation, quaternion_norm_tolerance=-1.0
            )
        ),
    ]
    for params in bad:
        with pytest.raises(TfParamsError):
            params.validate()


def test_as_nested_dict() -> None:
    """Nested dict should mirror the parameter tree."""
    data: dict[str, Any] = TfParams.defaults().as_nested_dict()
    assert data["topics"] == {"tf": "tf", "tf_static": "tf_static"}
    assert data["validation"]["quaternion_norm_tolerance"] == 1e-3
