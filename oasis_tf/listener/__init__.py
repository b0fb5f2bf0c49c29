################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Ingestion of incoming transforms."""

from oasis_tf.listener.tf_listener import IngestFailure
from oasis_tf.listener.tf_listener import IngestReport
from oasis_tf.listener.tf_listener import TfListener


__all__ = ["IngestFailure", "IngestReport", "TfListener"]
