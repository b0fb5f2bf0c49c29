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
Frame tree mapping every child frame to its parent and edge history
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from typing import Optional

import yaml

from oasis_tf.buffer.frame_buffer import FrameBuffer
from oasis_tf.math_utils.units import NumericConstants
from oasis_tf.tf_errors import InvalidRecordError
from oasis_tf.tf_errors import StructuralConflictError
from oasis_tf.tf_types.transform_record import TransformRecord
from oasis_tf.timing.rw_lock import ReadWriteLock
from oasis_tf.timing.time_base import ns_to_sec


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Edge:
    parent_frame: str
    buffer: FrameBuffer


class FrameGraph:
    """
    Tree of coordinate frames, one parent per child

    The child-to-edge mapping has its own lock, separate from the per-edge
    buffer locks, so a new edge being discovered never waits on steady-state
    inserts into existing edges.
    """

    def __init__(
        self,
        *,
        max_storage_duration_ns: int,
        slerp_dot_threshold: float = NumericConstants.SLERP_DOT_THRESHOLD,
    ) -> None:
        if max_storage_duration_ns <= 0:
            raise ValueError("max_storage_duration_ns must be positive")

        self._max_storage_duration_ns: int = max_storage_duration_ns
        self._slerp_dot_threshold: float = slerp_dot_threshold

        self._lock: ReadWriteLock = ReadWriteLock()
        self._edges: dict[str, _Edge] = {}
        # Every frame ever observed, as a parent or a child
        self._frames: set[str] = set()

    @property
    def max_storage_duration_ns(self) -> int:
        return self._max_storage_duration_ns

    def register_edge(
        self,
        parent_frame: str,
        child_frame: str,
        record: TransformRecord,
        is_static: bool,
    ) -> bool:
        """
        Insert a transform for the edge ``parent_frame -> child_frame``

        The edge's buffer is created on first observation.

        :return: True if the record was stored, False for an identical
                 duplicate

        :raises InvalidRecordError: if the record does not describe the edge
        :raises StructuralConflictError: if the child already has another
                                         parent, the edge would close a cycle,
                                         or the edge switches between static
                                         and dynamic
        :raises OutOfOrderError: if the buffer rejects the timestamp
        """
        if parent_frame == child_frame:
            raise InvalidRecordError(f"Frame {child_frame!r} cannot be its own parent")
        if record.parent_frame != parent_frame or record.child_frame != child_frame:
            raise InvalidRecordError(
                f"Record {record.parent_frame} -> {record.child_frame} does not "
                f"match edge {parent_frame} -> {child_frame}"
            )

        with self._lock.read_locked():
            edge: Optional[_Edge] = self._edges.get(child_frame)
            if edge is not None:
                self._check_existing_edge(edge, parent_frame, child_frame, is_static)

        if edge is None:
            edge = self._add_edge(parent_frame, child_frame, is_static)

        return edge.buffer.insert(record)

    def parent_of(self, frame: str) -> Optional[str]:
        """
        Return the parent of a frame, or None if no parent is recorded

        None covers both frames never observed and root frames; use
        ``has_frame()`` to tell them apart.
        """
        with self._lock.read_locked():
            edge: Optional[_Edge] = self._edges.get(frame)
            return edge.parent_frame if edge is not None else None

    def path_to_root(self, frame: str) -> list[str]:
        """
        Return ``[frame, parent, grandparent, ..., root]``
        """
        with self._lock.read_locked():
            return self._path_to_root_locked(frame)

    def edge_chain(self, frame: str) -> list[tuple[str, Optional[FrameBuffer]]]:
        """
        Return the path to the root paired with each frame's parent buffer

        The root entry has no buffer. The snapshot is taken under a single
        acquisition of the graph lock.
        """
        with self._lock.read_locked():
            path: list[str] = self._path_to_root_locked(frame)
            chain: list[tuple[str, Optional[FrameBuffer]]] = []
            for name in path:
                edge: Optional[_Edge] = self._edges.get(name)
                chain.append((name, edge.buffer if edge is not None else None))
            return chain

    def buffer_for(self, child_frame: str) -> Optional[FrameBuffer]:
        with self._lock.read_locked():
            edge: Optional[_Edge] = self._edges.get(child_frame)
            return edge.buffer if edge is not None else None

    def has_frame(self, frame: str) -> bool:
        with self._lock.read_locked():
            return frame in self._frames

    def frames(self) -> list[str]:
        with self._lock.read_locked():
            return sorted(self._frames)

    def clear(self) -> None:
        """
        Drop all stored transforms, keeping the known frame identifiers
        """
        with self._lock.read_locked():
            edges: list[_Edge] = list(self._edges.values())
        for edge in edges:
            edge.buffer.clear()

    def all_frames_as_string(self) -> str:
        """
        Return one line per edge: ``Frame <child> exists with parent <parent>.``
        """
        with self._lock.read_locked():
            items: list[tuple[str, str]] = sorted(
                (child, edge.parent_frame) for child, edge in self._edges.items()
            )
        return "".join(
            f"Frame {child} exists with parent {parent}.\n" for child, parent in items
        )

    def all_frames_as_yaml(self) -> str:
        """
        Return a YAML summary of every edge for debugging
        """
        with self._lock.read_locked():
            items: list[tuple[str, _Edge]] = sorted(self._edges.items())

        summary: dict[str, dict[str, Any]] = {}
        for child, edge in items:
            oldest_ns: Optional[int] = edge.buffer.oldest_time_ns()
            newest_ns: Optional[int] = edge.buffer.newest_time_ns()
            summary[child] = {
                "parent": edge.parent_frame,
                "is_static": edge.buffer.is_static,
                "buffer_length": len(edge.buffer),
                "oldest_transform_sec": (
                    ns_to_sec(oldest_ns) if oldest_ns is not None else None
                ),
                "most_recent_transform_sec": (
                    ns_to_sec(newest_ns) if newest_ns is not None else None
                ),
            }
        return yaml.safe_dump(summary, default_flow_style=False, sort_keys=True)

    def _add_edge(self, parent_frame: str, child_frame: str, is_static: bool) -> _Edge:
        with self._lock.write_locked():
            # Another producer may have created the edge since the read check
            edge: Optional[_Edge] = self._edges.get(child_frame)
            if edge is not None:
                self._check_existing_edge(edge, parent_frame, child_frame, is_static)
                return edge

            if child_frame in self._path_to_root_locked(parent_frame):
                raise StructuralConflictError(
                    f"Edge {parent_frame} -> {child_frame} would create a cycle"
                )

            edge = _Edge(
                parent_frame=parent_frame,
                buffer=FrameBuffer(
                    parent_frame,
                    child_frame,
                    max_storage_duration_ns=self._max_storage_duration_ns,
                    is_static=is_static,
                    slerp_dot_threshold=self._slerp_dot_threshold,
                ),
            )
            self._edges[child_frame] = edge
            self._frames.add(parent_frame)
            self._frames.add(child_frame)

        _LOG.info(
            "Discovered %s edge %s -> %s",
            "static" if is_static else "dynamic",
            parent_frame,
            child_frame,
        )
        return edge

    @staticmethod
    def _check_existing_edge(
        edge: _Edge, parent_frame: str, child_frame: str, is_static: bool
    ) -> None:
        if edge.parent_frame != parent_frame:
            raise StructuralConflictError(
                f"Frame {child_frame} already has parent {edge.parent_frame}, "
                f"rejecting new parent {parent_frame}"
            )
        if edge.buffer.is_static != is_static:
            raise StructuralConflictError(
                f"Edge {parent_frame} -> {child_frame} is "
                f"{'static' if edge.buffer.is_static else 'dynamic'} and cannot "
                f"receive {'static' if is_static else 'dynamic'} transforms"
            )

    def _path_to_root_locked(self, frame: str) -> list[str]:
        path: list[str] = [frame]
        edge: Optional[_Edge] = self._edges.get(frame)
        while edge is not None:
            path.append(edge.parent_frame)
            edge = self._edges.get(edge.parent_frame)
        return path
