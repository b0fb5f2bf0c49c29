################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Transport boundary and the in-process loopback transport."""

from oasis_tf.transport.loopback_transport import LoopbackTransport
from oasis_tf.transport.tf_transport import Subscription
from oasis_tf.transport.tf_transport import TfTransport


__all__ = ["LoopbackTransport", "Subscription", "TfTransport"]
