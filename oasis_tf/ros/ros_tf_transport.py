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
Transform transport over ROS 2 tf2_msgs/TFMessage topics
"""

from __future__ import annotations

from typing import Optional
from typing import Sequence

import rclpy.node
import rclpy.publisher
import rclpy.qos
import rclpy.subscription
from geometry_msgs.msg import TransformStamped as TransformStampedMsg
from tf2_msgs.msg import TFMessage as TFMessageMsg

from oasis_tf.tf_types.transform_message import TransformMessage
from oasis_tf.timing.time_base import NS_PER_S
from oasis_tf.timing.time_base import ns_to_stamp
from oasis_tf.transport.tf_transport import TransformCallback


################################################################################
# QoS
################################################################################


# Queue depth for both transform topics
TF_QUEUE_DEPTH: int = 100


def _dynamic_qos() -> rclpy.qos.QoSProfile:
    return rclpy.qos.QoSProfile(
        depth=TF_QUEUE_DEPTH,
        reliability=rclpy.qos.ReliabilityPolicy.RELIABLE,
        durability=rclpy.qos.DurabilityPolicy.VOLATILE,
    )


def _static_qos() -> rclpy.qos.QoSProfile:
    # Transient-local keeps the last message for late subscribers
    return rclpy.qos.QoSProfile(
        depth=1,
        reliability=rclpy.qos.ReliabilityPolicy.RELIABLE,
        durability=rclpy.qos.DurabilityPolicy.TRANSIENT_LOCAL,
        history=rclpy.qos.HistoryPolicy.KEEP_LAST,
    )


################################################################################
# Message conversion
################################################################################


def to_transform_stamped(message: TransformMessage) -> TransformStampedMsg:
    msg: TransformStampedMsg = TransformStampedMsg()

    sec, nanosec = ns_to_stamp(message.t_ns)
    msg.header.stamp.sec = sec
    msg.header.stamp.nanosec = nanosec
    msg.header.frame_id = message.parent_frame
    msg.child_frame_id = message.child_frame

    msg.transform.translation.x = float(message.translation[0])
    msg.transform.translation.y = float(message.translation[1])
    msg.transform.translation.z = float(message.translation[2])

    msg.transform.rotation.x = float(message.rotation_xyzw[0])
    msg.transform.rotation.y = float(message.rotation_xyzw[1])
    msg.transform.rotation.z = float(message.rotation_xyzw[2])
    msg.transform.rotation.w = float(message.rotation_xyzw[3])

    return msg


def from_transform_stamped(msg: TransformStampedMsg) -> TransformMessage:
    # Stamps pass through unchecked; a negative time is rejected per record
    # when the listener validates the batch
    t_ns: int = int(msg.header.stamp.sec) * NS_PER_S + int(msg.header.stamp.nanosec)

    return TransformMessage(
        parent_frame=msg.header.frame_id,
        child_frame=msg.child_frame_id,
        t_ns=t_ns,
        translation=(
            float(msg.transform.translation.x),
            float(msg.transform.translation.y),
            float(msg.transform.translation.z),
        ),
        rotation_xyzw=(
            float(msg.transform.rotation.x),
            float(msg.transform.rotation.y),
            float(msg.transform.rotation.z),
            float(msg.transform.rotation.w),
        ),
    )


################################################################################
# Transport
################################################################################


class RosSubscription:
    def __init__(
        self, node: rclpy.node.Node, subscription: rclpy.subscription.Subscription
    ) -> None:
        self._node: rclpy.node.Node = node
        self._subscription: rclpy.subscription.Subscription = subscription
        self._active: bool = True

    def unsubscribe(self) -> None:
        if self._active:
            self._active = False
            self._node.destroy_subscription(self._subscription)


class RosTfTransport:
    """
    Maps transform batches to tf2_msgs/TFMessage on a ROS 2 node

    Topics listed in ``latched_topics`` use transient-local durability, the
    convention for ``tf_static``.
    """

    def __init__(
        self, node: rclpy.node.Node, latched_topics: Sequence[str] = ("tf_static",)
    ) -> None:
        self._node: rclpy.node.Node = node
        self._latched_topics: frozenset[str] = frozenset(latched_topics)
        self._publishers: dict[str, rclpy.publisher.Publisher] = {}
        # Latched topic -> child frame -> latest message, republished as a whole
        self._latched: dict[str, dict[str, TransformMessage]] = {}

    def _qos(self, topic: str) -> rclpy.qos.QoSProfile:
        return _static_qos() if topic in self._latched_topics else _dynamic_qos()

    def subscribe(self, topic: str, callback: TransformCallback) -> RosSubscription:
        def _handle_tf_message(msg: TFMessageMsg) -> None:
            callback([from_transform_stamped(transform) for transform in msg.transforms])

        subscription: rclpy.subscription.Subscription = self._node.create_subscription(
            msg_type=TFMessageMsg,
            topic=topic,
            callback=_handle_tf_message,
            qos_profile=self._qos(topic),
        )
        return RosSubscription(self._node, subscription)

    def publish(self, topic: str, batch: Sequence[TransformMessage]) -> None:
        publisher: Optional[rclpy.publisher.Publisher] = self._publishers.get(topic)
        if publisher is None:
            publisher = self._node.create_publisher(
                msg_type=TFMessageMsg,
                topic=topic,
                qos_profile=self._qos(topic),
            )
            self._publishers[topic] = publisher

        messages: list[TransformMessage] = list(batch)
        if topic in self._latched_topics:
            # Depth-1 transient-local history only keeps the newest message
            latched: dict[str, TransformMessage] = self._latched.setdefault(topic, {})
            for message in messages:
                latched[message.child_frame] = message
            messages = list(latched.values())

        msg: TFMessageMsg = TFMessageMsg()
        msg.transforms = [to_transform_stamped(message) for message in messages]
        publisher.publish(msg)
