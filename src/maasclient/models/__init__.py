# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Resource records returned by the MAAS API."""

__all__ = ["Machine", "MAASBaseModel"]

from maasclient.models.base import MAASBaseModel
from maasclient.models.machines import Machine
