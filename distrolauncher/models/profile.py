"""Instance profile — the runtime's persisted record for a distribution."""

from __future__ import annotations

from enum import IntFlag

from pydantic import BaseModel, ConfigDict


class DistributionFlags(IntFlag):
    """Behavior flags stored in a distribution's profile."""

    NONE = 0x0
    ENABLE_INTEROP = 0x1
    APPEND_NT_PATH = 0x2
    ENABLE_DRIVE_MOUNTING = 0x4
    # Root filesystem is a VM-backed ext4.vhdx disk image (WSL 2)
    ENABLE_WSL2 = 0x8

    DEFAULT = ENABLE_INTEROP | APPEND_NT_PATH | ENABLE_DRIVE_MOUNTING
    ALL = DEFAULT | ENABLE_WSL2


class InstanceProfile(BaseModel):
    """Persisted configuration of a registered instance.

    Owned by the runtime. The launcher reads it once and writes it once
    during a disk-image install; modifications go through ``with_flags``
    which returns a new profile.
    """

    model_config = ConfigDict(frozen=True)

    registry_key: str = ""  # e.g. "{0d6a3f6e-...}"
    distribution_name: str
    base_path: str = ""
    flags: int = int(DistributionFlags.DEFAULT)
    state: int = 1
    version: int = 2
    default_uid: int = 0
    package_family_name: str = ""
    kernel_command_line: str = ""
    default_environment: list[str] = []

    def with_flags(self, mask: int) -> InstanceProfile:
        """Return a copy with ``mask`` OR-ed into the flag bitset."""
        return self.model_copy(update={"flags": self.flags | int(mask)})

    @property
    def is_vm_backed(self) -> bool:
        return bool(self.flags & DistributionFlags.ENABLE_WSL2)
