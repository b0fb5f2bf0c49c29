################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Configuration for transform buffering."""

from oasis_tf.config.tf_config import TfConfig
from oasis_tf.config.tf_config import TfConfigError
from oasis_tf.config.tf_config import load_tf_config
from oasis_tf.config.tf_params import TfParams


__all__ = ["TfConfig", "TfConfigError", "TfParams", "load_tf_config"]
