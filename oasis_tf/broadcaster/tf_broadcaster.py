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
Publication of locally computed transforms

Broadcasters are stateless apart from their transport reference. A batch is
validated in full before anything is published.
"""

from __future__ import annotations

import logging
from typing import Optional
from typing import Sequence
from typing import Union

from oasis_tf.config.tf_config import TfConfig
from oasis_tf.tf_errors import InvalidRecordError
from oasis_tf.tf_errors import TfTransportError
from oasis_tf.tf_types.transform_message import TransformMessage
from oasis_tf.tf_types.transform_record import TransformRecord
from oasis_tf.tf_types.transform_record import check_rotation_norm
from oasis_tf.tf_types.transform_record import require_distinct_frames
from oasis_tf.transport.tf_transport import TfTransport


_LOG: logging.Logger = logging.getLogger(__name__)


class TfBroadcaster:
    """
    Publishes dynamic transforms on the ``tf`` topic
    """

    def __init__(
        self, transport: TfTransport, *, config: Optional[TfConfig] = None
    ) -> None:
        self._transport: TfTransport = transport
        self._config: TfConfig = config if config is not None else TfConfig.defaults()

    @property
    def topic(self) -> str:
        return self._config.tf_topic()

    @property
    def is_static(self) -> bool:
        return False

    def send_transform(
        self, transforms: Union[TransformRecord, Sequence[TransformRecord]]
    ) -> None:
        """
        Validate and publish one record or a batch of records

        :raises InvalidRecordError: if any record is malformed; nothing is
                                    published in that case
        :raises TfTransportError: if the transport fails to publish
        """
        records: list[TransformRecord] = (
            [transforms] if isinstance(transforms, TransformRecord) else list(transforms)
        )
        if not records:
            return

        tolerance: float = self._config.quaternion_norm_tolerance()
        batch: list[TransformMessage] = []
        for record in records:
            if not isinstance(record, TransformRecord):
                raise InvalidRecordError(
                    f"Expected a TransformRecord, got {type(record).__name__}"
                )
            require_distinct_frames(record.parent_frame, record.child_frame)
            check_rotation_norm(record.rotation, tolerance)
            batch.append(TransformMessage.from_record(record, self.is_static))

        try:
            self._transport.publish(self.topic, batch)
        except Exception as exc:
            raise TfTransportError(
                f"Failed to publish {len(batch)} transforms on {self.topic}: {exc}"
            ) from exc

        _LOG.debug("Published %d transforms on %s", len(batch), self.topic)


class StaticTfBroadcaster(TfBroadcaster):
    """
    Publishes transforms that never change on the latched ``tf_static`` topic
    """

    @property
    def topic(self) -> str:
        return self._config.tf_static_topic()

    @property
    def is_static(self) -> bool:
        return True
