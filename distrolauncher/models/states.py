"""Disk-image install state machine models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class DiskImageState(str, Enum):
    """States of one disk-image install attempt."""

    START = "start"
    PLACEHOLDER_REGISTERED = "placeholder_registered"
    PROFILE_READ = "profile_read"
    PLACEHOLDER_REMOVED = "placeholder_removed"
    IMAGE_WRITTEN = "image_written"
    CONFIG_PATCHED = "config_patched"
    FAILED = "failed"


# Valid state transitions — enforced by DiskImageInstaller.
# Forward-only; no rollback edges. CONFIG_PATCHED and FAILED are terminal.
VALID_TRANSITIONS: dict[DiskImageState, set[DiskImageState]] = {
    DiskImageState.START: {DiskImageState.PLACEHOLDER_REGISTERED, DiskImageState.FAILED},
    DiskImageState.PLACEHOLDER_REGISTERED: {DiskImageState.PROFILE_READ, DiskImageState.FAILED},
    DiskImageState.PROFILE_READ: {DiskImageState.PLACEHOLDER_REMOVED, DiskImageState.FAILED},
    DiskImageState.PLACEHOLDER_REMOVED: {DiskImageState.IMAGE_WRITTEN, DiskImageState.FAILED},
    DiskImageState.IMAGE_WRITTEN: {DiskImageState.CONFIG_PATCHED, DiskImageState.FAILED},
    DiskImageState.CONFIG_PATCHED: set(),  # terminal
    DiskImageState.FAILED: set(),  # terminal
}


class StateTransition(BaseModel):
    """Records a single state transition."""

    model_config = ConfigDict(frozen=True)

    from_state: DiskImageState
    to_state: DiskImageState
    reason: str | None = None  # populated when entering FAILED
