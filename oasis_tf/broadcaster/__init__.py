################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Publication of outgoing transforms."""

from oasis_tf.broadcaster.tf_broadcaster import StaticTfBroadcaster
from oasis_tf.broadcaster.tf_broadcaster import TfBroadcaster


__all__ = ["StaticTfBroadcaster", "TfBroadcaster"]
