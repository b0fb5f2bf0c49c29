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
Ingestion of transform batches into a frame graph

The listener is the only write path into the graph. Each entry of a batch is
validated and registered on its own: a rejected entry is reported and logged,
and the remaining entries are still ingested.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Iterable
from typing import Mapping
from typing import Optional
from typing import Union

from oasis_tf.config.tf_config import TfConfig
from oasis_tf.graph.frame_graph import FrameGraph
from oasis_tf.resolver.transform_resolver import TransformResolver
from oasis_tf.tf_errors import InvalidRecordError
from oasis_tf.tf_errors import TfIngestError
from oasis_tf.tf_types.transform_message import TransformMessage
from oasis_tf.tf_types.transform_record import TransformRecord
from oasis_tf.transport.tf_transport import Subscription
from oasis_tf.transport.tf_transport import TfTransport


_LOG: logging.Logger = logging.getLogger(__name__)


# Entry of an incoming batch, as delivered by a transport or a test
IncomingTransform = Union[TransformMessage, Mapping[str, Any]]


@dataclass(frozen=True)
class IngestFailure:
    """A batch entry rejected during ingestion.

    Attributes:
        index: Position of the entry in its batch
        parent_frame: Parent frame ID as received, if readable
        child_frame: Child frame ID as received, if readable
        error: The ingestion error describing the rejection
    """

    index: int
    parent_frame: Optional[str]
    child_frame: Optional[str]
    error: TfIngestError


@dataclass
class IngestReport:
    """Outcome of ingesting one batch."""

    accepted: int = 0
    duplicates: int = 0
    failures: list[IngestFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.accepted + self.duplicates + len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures


class TfListener:
    """
    Feeds transforms from a transport into a frame graph and answers lookups

    Args:
        graph: Graph to populate, or None to create one from the config
        transport: Transport to subscribe to, or None to ingest manually via
            ``on_transform_message()``
        config: Topic names, retention and validation settings
    """

    def __init__(
        self,
        graph: Optional[FrameGraph] = None,
        *,
        transport: Optional[TfTransport] = None,
        config: Optional[TfConfig] = None,
    ) -> None:
        self._config: TfConfig = config if config is not None else TfConfig.defaults()

        if graph is None:
            graph = FrameGraph(
                max_storage_duration_ns=self._config.cache_duration_ns(),
                slerp_dot_threshold=self._config.slerp_dot_threshold(),
            )
        self._graph: FrameGraph = graph
        self._resolver: TransformResolver = TransformResolver(graph)

        self._subscriptions: list[Subscription] = []
        if transport is not None:
            self._subscriptions.append(
                transport.subscribe(
                    self._config.tf_topic(),
                    lambda batch: self.on_transform_message(batch, False),
                )
            )
            self._subscriptions.append(
                transport.subscribe(
                    self._config.tf_static_topic(),
                    lambda batch: self.on_transform_message(batch, True),
                )
            )

    @property
    def graph(self) -> FrameGraph:
        return self._graph

    @property
    def resolver(self) -> TransformResolver:
        return self._resolver

    def on_transform_message(
        self, batch: Iterable[IncomingTransform], is_static: bool
    ) -> IngestReport:
        """
        Validate and register every transform of a batch

        :param batch: Messages or plain mappings with the message fields
        :param is_static: Channel flag; a per-message ``is_static`` overrides it

        :return: Counts of accepted and duplicate entries, plus failures
        """
        report: IngestReport = IngestReport()

        for index, entry in enumerate(batch):
            try:
                message: TransformMessage = _to_message(entry)
                entry_static: bool = (
                    message.is_static if message.is_static is not None else is_static
                )
                record: TransformRecord = message.to_record(
                    self._config.quaternion_norm_tolerance()
                )
                stored: bool = self._graph.register_edge(
                    record.parent_frame, record.child_frame, record, entry_static
                )
            except TfIngestError as exc:
                failure: IngestFailure = IngestFailure(
                    index=index,
                    parent_frame=_frame_field(entry, "parent_frame"),
                    child_frame=_frame_field(entry, "child_frame"),
                    error=exc,
                )
                report.failures.append(failure)
                _LOG.warning(
                    "Rejected transform %s -> %s (%s): %s",
                    failure.parent_frame,
                    failure.child_frame,
                    type(exc).__name__,
                    exc,
                )
                continue

            if stored:
                report.accepted += 1
            else:
                report.duplicates += 1

        _LOG.debug(
            "Ingested %s batch: %d accepted, %d duplicate, %d rejected",
            "static" if is_static else "dynamic",
            report.accepted,
            report.duplicates,
            len(report.failures),
        )
        return report

    def lookup_transform(
        self, source_frame: str, target_frame: str, t_ns: int
    ) -> TransformRecord:
        return self._resolver.lookup_transform(source_frame, target_frame, t_ns)

    def lookup_transform_with_fixed_frame(
        self,
        source_frame: str,
        source_t_ns: int,
        target_frame: str,
        target_t_ns: int,
        fixed_frame: str,
    ) -> TransformRecord:
        return self._resolver.lookup_transform_with_fixed_frame(
            source_frame, source_t_ns, target_frame, target_t_ns, fixed_frame
        )

    def can_transform(self, source_frame: str, target_frame: str, t_ns: int) -> bool:
        return self._resolver.can_transform(source_frame, target_frame, t_ns)

    def can_transform_with_fixed_frame(
        self,
        source_frame: str,
        source_t_ns: int,
        target_frame: str,
        target_t_ns: int,
        fixed_frame: str,
    ) -> bool:
        return self._resolver.can_transform_with_fixed_frame(
            source_frame, source_t_ns, target_frame, target_t_ns, fixed_frame
        )

    def close(self) -> None:
        """Stop receiving transforms from the transport."""
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()


def _to_message(entry: IncomingTransform) -> TransformMessage:
    if isinstance(entry, TransformMessage):
        return entry
    if isinstance(entry, Mapping):
        return TransformMessage.from_dict(entry)

    raise InvalidRecordError(f"Unsupported transform entry: {type(entry).__name__}")


def _frame_field(entry: IncomingTransform, name: str) -> Optional[str]:
    value: Any
    if isinstance(entry, TransformMessage):
        value = getattr(entry, name)
    elif isinstance(entry, Mapping):
        value = entry.get(name)
    else:
        return None
    return value if isinstance(value, str) else None
