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
In-process transport delivering transform batches synchronously

Used by tests and by single-process applications that share one transform
tree between producers and consumers.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable
from typing import Optional
from typing import Sequence

from oasis_tf.tf_types.transform_message import TransformMessage
from oasis_tf.transport.tf_transport import TransformCallback


_LOG: logging.Logger = logging.getLogger(__name__)


class LoopbackSubscription:
    """Handle returned by ``LoopbackTransport.subscribe()``."""

    def __init__(
        self, transport: LoopbackTransport, topic: str, callback: TransformCallback
    ) -> None:
        self._transport: LoopbackTransport = transport
        self._topic: str = topic
        self._callback: TransformCallback = callback
        self._active: bool = True

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if self._active:
            self._active = False
            self._transport._remove(self)

    def _deliver(self, batch: list[TransformMessage]) -> None:
        if self._active:
            self._callback(batch)


class LoopbackTransport:
    """
    Synchronous publish/subscribe transport within one process

    Batches are delivered in the publishing thread, in subscription order.
    Latched topics retain the latest message per child frame and replay them
    to subscribers that join later.
    """

    def __init__(self, latched_topics: Optional[Iterable[str]] = None) -> None:
        self._lock: threading.Lock = threading.Lock()
        self._subscriptions: dict[str, list[LoopbackSubscription]] = {}
        self._latched_topics: frozenset[str] = frozenset(latched_topics or ())
        # Latched topic -> child frame -> latest message
        self._latched: dict[str, dict[str, TransformMessage]] = {}

    def is_latched(self, topic: str) -> bool:
        return topic in self._latched_topics

    def subscribe(self, topic: str, callback: TransformCallback) -> LoopbackSubscription:
        subscription: LoopbackSubscription = LoopbackSubscription(
            self, topic, callback
        )

        with self._lock:
            self._subscriptions.setdefault(topic, []).append(subscription)
            replay: list[TransformMessage] = list(
                self._latched.get(topic, {}).values()
            )

        if replay:
            _LOG.debug(
                "Replaying %d latched transforms on %s", len(replay), topic
            )
            subscription._deliver(replay)

        return subscription

    def publish(self, topic: str, batch: Sequence[TransformMessage]) -> None:
        messages: list[TransformMessage] = list(batch)
        if not messages:
            return

        with self._lock:
            if topic in self._latched_topics:
                latched: dict[str, TransformMessage] = self._latched.setdefault(
                    topic, {}
                )
                for message in messages:
                    latched[message.child_frame] = message
            subscribers: list[LoopbackSubscription] = list(
                self._subscriptions.get(topic, [])
            )

        for subscription in subscribers:
            subscription._deliver(messages)

    def subscriber_count(self, topic: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(topic, []))

    def _remove(self, subscription: LoopbackSubscription) -> None:
        with self._lock:
            subscribers: list[LoopbackSubscription] = self._subscriptions.get(
                subscription.topic, []
            )
            if subscription in subscribers:
                subscribers.remove(subscription)
