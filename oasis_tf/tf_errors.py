################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Error taxonomy for transform buffering and lookup.

Lookup errors are returned to the caller of a query. Ingest errors describe
a misbehaving producer and are reported per record without aborting a batch.
"""

from __future__ import annotations

from typing import Optional


class TfError(Exception):
    """Base class for transform errors."""


################################################################################
# Query-time errors
################################################################################


class TfLookupError(TfError):
    """Raised when a transform query cannot be answered."""


class NoDataError(TfLookupError):
    """Raised when a frame or edge has never received a transform."""


class ExtrapolationError(TfLookupError):
    """
    Raised when a query time lies outside the stored history of an edge.

    Attributes:
        t_ns: Requested time in nanoseconds
        oldest_ns: Oldest stored timestamp for the edge
        newest_ns: Newest stored timestamp for the edge
    """

    def __init__(
        self,
        message: str,
        *,
        t_ns: Optional[int] = None,
        oldest_ns: Optional[int] = None,
        newest_ns: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.t_ns: Optional[int] = t_ns
        self.oldest_ns: Optional[int] = oldest_ns
        self.newest_ns: Optional[int] = newest_ns


class LookupInPastError(ExtrapolationError):
    """Raised when the query time is older than the oldest stored record."""


class LookupInFutureError(ExtrapolationError):
    """Raised when the query time is newer than the newest stored record."""


class ConnectivityError(TfLookupError):
    """Raised when two frames do not share a common ancestor."""


class InvalidQueryTimeError(TfLookupError):
    """Raised when a query time is not a non-negative integer."""


################################################################################
# Ingestion-time errors
################################################################################


class TfIngestError(TfError):
    """Raised when an incoming transform is rejected."""


class OutOfOrderError(TfIngestError):
    """Raised when a timestamp violates an edge's retention window."""


class StructuralConflictError(TfIngestError):
    """Raised when an edge would give a frame a second parent or a cycle."""


class InvalidRecordError(TfIngestError):
    """Raised when frame identifiers, rotation or translation are malformed."""


################################################################################
# Publication errors
################################################################################


class TfTransportError(TfError):
    """Raised when the transport layer fails to publish transforms."""
