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
Time-indexed transform tree for robot coordinate frames

The core API is free of ROS; the ROS 2 transport, node and CLI live in the
``ros``, ``nodes`` and ``cli`` subpackages.
"""

from __future__ import annotations

from oasis_tf.broadcaster.tf_broadcaster import StaticTfBroadcaster
from oasis_tf.broadcaster.tf_broadcaster import TfBroadcaster
from oasis_tf.buffer.frame_buffer import FrameBuffer
from oasis_tf.config.tf_config import TfConfig
from oasis_tf.graph.frame_graph import FrameGraph
from oasis_tf.listener.tf_listener import IngestReport
from oasis_tf.listener.tf_listener import TfListener
from oasis_tf.resolver.transform_resolver import TransformResolver
from oasis_tf.tf_types.transform_message import TransformMessage
from oasis_tf.tf_types.transform_record import TransformRecord
from oasis_tf.timing.time_base import TIME_LATEST_NS
from oasis_tf.transport.loopback_transport import LoopbackTransport


__all__ = [
    "FrameBuffer",
    "FrameGraph",
    "IngestReport",
    "LoopbackTransport",
    "StaticTfBroadcaster",
    "TIME_LATEST_NS",
    "TfBroadcaster",
    "TfConfig",
    "TfListener",
    "TransformMessage",
    "TransformRecord",
    "TransformResolver",
]
