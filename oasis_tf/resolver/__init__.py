################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Transform chain resolution
"""

from __future__ import annotations

from oasis_tf.resolver.transform_resolver import TransformResolver


__all__ = ["TransformResolver"]
