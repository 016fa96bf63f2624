# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from pydantic import Field

from maasclient.models.base import MAASBaseModel

# Widths of the integers MAAS stores for these fields.
MAX_MEMORY = 2**64 - 1
MAX_CPU_COUNT = 2**32 - 1


class Machine(MAASBaseModel):
    """A physical or virtual machine managed by MAAS.

    This matches an entry of the JSON output of `GET /api/2.0/machines/`.
    """

    # The unique 5-6 character ID, e.g. "x8d7f".
    system_id: str
    hostname: str
    # "on", "off", "error" or "unknown".
    power_state: str
    # E.g. "amd64/generic".
    architecture: str
    # Total RAM in MiB.
    memory: int = Field(ge=0, le=MAX_MEMORY)
    cpu_count: int = Field(ge=0, le=MAX_CPU_COUNT)
    # The human-readable status, e.g. "Ready", "Deployed" or "Broken".
    status: str = Field(alias="status_name")
    ip_addresses: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list, alias="tag_names")

    def is_on(self) -> bool:
        return self.power_state == "on"

    def summary(self) -> str:
        """Return a one-line summary, as shown by the CLI."""
        return (
            f"[{self.system_id}] {self.hostname} ({self.cpu_count} cores, "
            f"{self.memory} MiB) - {self.status}"
        )
