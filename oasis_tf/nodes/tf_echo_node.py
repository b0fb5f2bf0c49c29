################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""ROS 2 node that periodically prints the transform between two frames."""

from __future__ import annotations

import math

import numpy as np
import rclpy.node
import rclpy.timer
from numpy.typing import NDArray

from oasis_tf.config.tf_config import TfConfig
from oasis_tf.config.tf_config import load_tf_config
from oasis_tf.listener.tf_listener import TfListener
from oasis_tf.math_utils.units import Angle
from oasis_tf.ros.ros_tf_transport import RosTfTransport
from oasis_tf.tf_errors import TfLookupError
from oasis_tf.tf_types.transform_record import TransformRecord
from oasis_tf.timing.time_base import TIME_LATEST_NS
from oasis_tf.timing.time_base import ns_to_sec


################################################################################
# ROS parameters
################################################################################


NODE_NAME: str = "tf_echo"

# Default frames to resolve
DEFAULT_SOURCE_FRAME: str = "world"
DEFAULT_TARGET_FRAME: str = "base_link"

# Default print rate in Hz
DEFAULT_RATE_HZ: float = 1.0


################################################################################
# Helper functions
################################################################################


def format_transform(record: TransformRecord) -> str:
    """Render a resolved transform as one human-readable line."""
    x, y, z = (float(v) for v in record.translation_m)
    qx, qy, qz, qw = (float(v) for v in record.rotation_xyzw)

    # Roll, pitch and yaw of the rotation matrix, ZYX convention
    R: NDArray[np.float64] = record.rotation.as_matrix()
    roll: float = math.atan2(float(R[2, 1]), float(R[2, 2]))
    pitch: float = math.asin(max(-1.0, min(1.0, -float(R[2, 0]))))
    yaw: float = math.atan2(float(R[1, 0]), float(R[0, 0]))

    return (
        f"At time {ns_to_sec(record.t_ns):.9f}: "
        f"{record.parent_frame} -> {record.child_frame} "
        f"translation [{x:.3f}, {y:.3f}, {z:.3f}] "
        f"rotation xyzw [{qx:.3f}, {qy:.3f}, {qz:.3f}, {qw:.3f}] "
        f"rpy deg [{Angle.rad2deg(roll):.3f}, {Angle.rad2deg(pitch):.3f}, "
        f"{Angle.rad2deg(yaw):.3f}]"
    )


################################################################################
# ROS node
################################################################################


class TfEchoNode(rclpy.node.Node):
    def __init__(self) -> None:
        """Initialize resources."""

        super().__init__(NODE_NAME)

        # ROS parameters
        self.declare_parameter("source_frame", DEFAULT_SOURCE_FRAME)
        self.declare_parameter("target_frame", DEFAULT_TARGET_FRAME)
        self.declare_parameter("rate", DEFAULT_RATE_HZ)
        self.declare_parameter("config_path", "")

        self._source_frame: str = str(self.get_parameter("source_frame").value)
        self._target_frame: str = str(self.get_parameter("target_frame").value)
        if not self._source_frame or not self._target_frame:
            self.get_logger().error("source_frame and target_frame must be set")
            raise RuntimeError("Missing frame parameter")

        rate_hz: float = float(self.get_parameter("rate").value)
        if not math.isfinite(rate_hz) or rate_hz <= 0.0:
            self.get_logger().error(f"Invalid rate: {rate_hz}")
            raise RuntimeError("Invalid rate parameter")

        config_path: str = str(self.get_parameter("config_path").value)
        config: TfConfig = (
            load_tf_config(config_path) if config_path else TfConfig.defaults()
        )

        # Transform tree
        self._transport: RosTfTransport = RosTfTransport(
            self, latched_topics=(config.tf_static_topic(),)
        )
        self._listener: TfListener = TfListener(
            transport=self._transport, config=config
        )

        # ROS timers
        self._timer: rclpy.timer.Timer = self.create_timer(
            1.0 / rate_hz, self._echo_transform
        )

        self.get_logger().info(
            f"Echoing {self._source_frame} -> {self._target_frame} at {rate_hz} Hz"
        )

    def stop(self) -> None:
        self.get_logger().info("TF echo node deinitialized")

        self._listener.close()
        self.destroy_node()

    def _echo_transform(self) -> None:
        try:
            record: TransformRecord = self._listener.lookup_transform(
                self._source_frame, self._target_frame, TIME_LATEST_NS
            )
        except TfLookupError as err:
            self.get_logger().warning(f"Lookup failed: {err}")
            return

        self.get_logger().info(format_transform(record))
