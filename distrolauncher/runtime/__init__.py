"""Virtualization runtime adapters.

Modules
-------
base
    ``DistributionRuntime`` Protocol: register, unregister, read profile,
    write profile.
wsl
    ``WslRuntime`` — the Windows implementation over ``wslapi.dll`` and the
    Lxss registry hive.
"""

from __future__ import annotations

from distrolauncher.runtime.base import DistributionRuntime


def get_runtime() -> DistributionRuntime:
    """Return the runtime adapter for this host.

    Raises ``RuntimeUnavailableError`` where WSL is not available.
    """
    from distrolauncher.runtime.wsl import WslRuntime

    return WslRuntime()


__all__ = ["DistributionRuntime", "get_runtime"]
