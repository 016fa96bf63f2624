# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

__all__ = ["configure_logging", "get_logger"]

from maasclient.logging.configure import configure_logging, get_logger
