################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Type definitions for stamped transforms."""

from __future__ import annotations

from oasis_tf.tf_types.transform_message import TransformMessage
from oasis_tf.tf_types.transform_record import TransformRecord


__all__ = ["TransformMessage", "TransformRecord"]
