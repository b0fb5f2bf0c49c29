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
Per-edge transform history
"""

from __future__ import annotations

from oasis_tf.buffer.frame_buffer import FrameBuffer


__all__ = ["FrameBuffer"]
