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
Frame tree maintenance
"""

from __future__ import annotations

from oasis_tf.graph.frame_graph import FrameGraph


__all__ = ["FrameGraph"]
