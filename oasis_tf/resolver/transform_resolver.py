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
Chain resolution between arbitrary frames of a frame graph

Frames are connected through their lowest common ancestor. Each side of the
chain is composed from per-edge queries at the requested time, so a
resolution either uses data from every edge at that time or fails.
"""

from __future__ import annotations

from typing import Optional

from oasis_tf.buffer.frame_buffer import FrameBuffer
from oasis_tf.graph.frame_graph import FrameGraph
from oasis_tf.math_utils.se3 import SE3
from oasis_tf.tf_errors import ConnectivityError
from oasis_tf.tf_errors import InvalidQueryTimeError
from oasis_tf.tf_errors import NoDataError
from oasis_tf.tf_errors import TfLookupError
from oasis_tf.tf_types.transform_record import TransformRecord
from oasis_tf.timing.time_base import TimeBaseError
from oasis_tf.timing.time_base import validate_t_ns


class TransformResolver:
    """
    Read-only query surface over a FrameGraph

    ``lookup_transform(source, target, t)`` returns a record with
    ``parent_frame=source`` and ``child_frame=target`` whose transform maps
    coordinates expressed in ``target`` into ``source``.
    """

    def __init__(self, graph: FrameGraph) -> None:
        self._graph: FrameGraph = graph

    @property
    def graph(self) -> FrameGraph:
        return self._graph

    def lookup_transform(
        self, source_frame: str, target_frame: str, t_ns: int
    ) -> TransformRecord:
        """
        Resolve the transform between two frames at a time

        :param t_ns: Query time in nanoseconds, or 0 for the latest data on
                     every edge of the chain

        :raises NoDataError: if a frame is unknown or an edge has no data
        :raises ConnectivityError: if the frames share no common ancestor
        :raises ExtrapolationError: if an edge has no data at ``t_ns``
        :raises InvalidQueryTimeError: if ``t_ns`` is not a non-negative int
        """
        _check_query_time(t_ns, "t_ns")

        if source_frame == target_frame:
            return TransformRecord.identity(source_frame, target_frame, t_ns)

        T_source_target: SE3 = self._resolve(source_frame, target_frame, t_ns)

        return TransformRecord.from_transform(
            t_ns=t_ns,
            parent_frame=source_frame,
            child_frame=target_frame,
            transform=T_source_target,
        )

    def lookup_transform_with_fixed_frame(
        self,
        source_frame: str,
        source_t_ns: int,
        target_frame: str,
        target_t_ns: int,
        fixed_frame: str,
    ) -> TransformRecord:
        """
        Resolve a transform across two times through a frame assumed static

        The source side is evaluated at ``source_t_ns`` and the target side at
        ``target_t_ns``. The result is stamped ``source_t_ns``.
        """
        _check_query_time(source_t_ns, "source_t_ns")
        _check_query_time(target_t_ns, "target_t_ns")

        T_source_fixed: SE3 = self._resolve(source_frame, fixed_frame, source_t_ns)
        T_fixed_target: SE3 = self._resolve(fixed_frame, target_frame, target_t_ns)

        return TransformRecord.from_transform(
            t_ns=source_t_ns,
            parent_frame=source_frame,
            child_frame=target_frame,
            transform=T_source_fixed * T_fixed_target,
        )

    def can_transform(self, source_frame: str, target_frame: str, t_ns: int) -> bool:
        try:
            self.lookup_transform(source_frame, target_frame, t_ns)
        except TfLookupError:
            return False
        return True

    def can_transform_with_fixed_frame(
        self,
        source_frame: str,
        source_t_ns: int,
        target_frame: str,
        target_t_ns: int,
        fixed_frame: str,
    ) -> bool:
        try:
            self.lookup_transform_with_fixed_frame(
                source_frame, source_t_ns, target_frame, target_t_ns, fixed_frame
            )
        except TfLookupError:
            return False
        return True

    def _resolve(self, source_frame: str, target_frame: str, t_ns: int) -> SE3:
        """Return ``T_source_target`` composed through the common ancestor."""
        if source_frame == target_frame:
            return SE3.identity()

        for frame in (source_frame, target_frame):
            if not self._graph.has_frame(frame):
                raise NoDataError(f"Frame {frame!r} does not exist")

        source_chain: list[tuple[str, Optional[FrameBuffer]]] = (
            self._graph.edge_chain(source_frame)
        )
        target_chain: list[tuple[str, Optional[FrameBuffer]]] = (
            self._graph.edge_chain(target_frame)
        )

        target_path: set[str] = {frame for frame, _ in target_chain}
        ancestor: Optional[str] = None
        for frame, _ in source_chain:
            if frame in target_path:
                ancestor = frame
                break
        if ancestor is None:
            raise ConnectivityError(
                f"Frames {source_frame!r} and {target_frame!r} are not connected "
                "by a common ancestor"
            )

        T_ancestor_source: SE3 = _compose_to_ancestor(source_chain, ancestor, t_ns)
        T_ancestor_target: SE3 = _compose_to_ancestor(target_chain, ancestor, t_ns)

        return T_ancestor_source.inverse() * T_ancestor_target


def _compose_to_ancestor(
    chain: list[tuple[str, Optional[FrameBuffer]]], ancestor: str, t_ns: int
) -> SE3:
    """Return ``T_ancestor_frame`` for the first frame of the chain."""
    T_acc: SE3 = SE3.identity()
    for frame, buffer in chain:
        if frame == ancestor:
            return T_acc
        if buffer is None:
            # Reached a root that is not the ancestor
            break
        T_acc = buffer.query(t_ns).as_transform() * T_acc

    raise ConnectivityError(f"Frame {chain[0][0]!r} does not reach {ancestor!r}")



def _check_query_time(t_ns: int, name: str) -> None:
    try:
        validate_t_ns(t_ns, name)
    except TimeBaseError as exc:
        raise InvalidQueryTimeError(str(exc)) from exc
