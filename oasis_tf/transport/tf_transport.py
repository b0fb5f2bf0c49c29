################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Boundary between transform producers/consumers and a message transport."""

from __future__ import annotations

from typing import Callable
from typing import Protocol
from typing import Sequence

from oasis_tf.tf_types.transform_message import TransformMessage


# Callback invoked with every batch delivered on a subscribed topic
TransformCallback = Callable[[list[TransformMessage]], None]


class Subscription(Protocol):
    def unsubscribe(self) -> None: ...


class TfTransport(Protocol):
    """Publish/subscribe primitives the listener and broadcasters rely on.

    Implementations decide threading: callbacks may run on any thread, and
    latching of the static topic is the transport's responsibility.
    """

    def subscribe(self, topic: str, callback: TransformCallback) -> Subscription: ...

    def publish(self, topic: str, batch: Sequence[TransformMessage]) -> None: ...
