"""distrolauncher data models — all Pydantic v2, all frozen (immutable)."""

from distrolauncher.models.install import (
    ArtifactClassification,
    InstallRequest,
    InstallResult,
    InstallStrategy,
    ResolvedArtifact,
)
from distrolauncher.models.profile import DistributionFlags, InstanceProfile
from distrolauncher.models.states import (
    VALID_TRANSITIONS,
    DiskImageState,
    StateTransition,
)

__all__ = [
    # install
    "InstallStrategy",
    "InstallRequest",
    "ResolvedArtifact",
    "ArtifactClassification",
    "InstallResult",
    # profile
    "DistributionFlags",
    "InstanceProfile",
    # states
    "DiskImageState",
    "StateTransition",
    "VALID_TRANSITIONS",
]
