"""Windows Subsystem for Linux runtime adapter.

Registration goes through ``wslapi.dll`` via ctypes; profiles are read and
written directly in the per-user Lxss registry hive::

    HKCU\\Software\\Microsoft\\Windows\\CurrentVersion\\Lxss\\{GUID}
        DistributionName   REG_SZ
        BasePath           REG_SZ
        Flags              REG_DWORD
        State              REG_DWORD
        Version            REG_DWORD
        DefaultUid         REG_DWORD
        PackageFamilyName  REG_SZ
        KernelCommandLine  REG_SZ
        DefaultEnvironment REG_MULTI_SZ
"""

from __future__ import annotations

import ctypes
import logging
import sys
from pathlib import Path
from typing import Any

from distrolauncher.core.errors import (
    ProfileLookupError,
    ProfileWriteError,
    RegistrationError,
    RuntimeUnavailableError,
    UnregistrationError,
)
from distrolauncher.models.profile import InstanceProfile

logger = logging.getLogger(__name__)

LXSS_KEY = r"Software\Microsoft\Windows\CurrentVersion\Lxss"


def _hresult_hex(hr: int) -> str:
    return f"0x{hr & 0xFFFFFFFF:08X}"


def _load_wslapi() -> Any:
    try:
        api = ctypes.WinDLL("wslapi")
    except OSError as exc:
        raise RuntimeUnavailableError(f"Could not load wslapi.dll: {exc}") from exc

    api.WslRegisterDistribution.argtypes = [ctypes.c_wchar_p, ctypes.c_wchar_p]
    api.WslRegisterDistribution.restype = ctypes.c_long
    api.WslUnregisterDistribution.argtypes = [ctypes.c_wchar_p]
    api.WslUnregisterDistribution.restype = ctypes.c_long
    return api


class WslRuntime:
    """``DistributionRuntime`` backed by the host's WSL installation.

    ``api`` and ``registry`` default to ``wslapi.dll`` and the ``winreg``
    module; any objects with the same call surface may be passed instead.

    Raises
    ------
    RuntimeUnavailableError
        When not running on Windows or ``wslapi.dll`` cannot be loaded.
    """

    def __init__(self, api: Any = None, registry: Any = None) -> None:
        if api is None or registry is None:
            if sys.platform != "win32":
                raise RuntimeUnavailableError(
                    f"WSL is only available on Windows (platform: {sys.platform})"
                )
        if registry is None:
            import winreg as registry
        self._winreg = registry
        self._api = api if api is not None else _load_wslapi()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_distribution(self, name: str, root_artifact_path: Path | str) -> None:
        logger.info("Registering %s from %s", name, root_artifact_path)
        hr = self._api.WslRegisterDistribution(name, str(root_artifact_path))
        if hr < 0:
            raise RegistrationError(
                f"WslRegisterDistribution({name!r}) failed with HRESULT {_hresult_hex(hr)}"
            )

    def unregister_distribution(self, name: str) -> None:
        logger.info("Unregistering %s", name)
        hr = self._api.WslUnregisterDistribution(name)
        if hr < 0:
            raise UnregistrationError(
                f"WslUnregisterDistribution({name!r}) failed with HRESULT {_hresult_hex(hr)}"
            )

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def _query(self, key: Any, value_name: str, default: Any) -> Any:
        try:
            value, _ = self._winreg.QueryValueEx(key, value_name)
        except FileNotFoundError:
            return default
        return value

    def _iter_profile_keys(self):
        winreg = self._winreg
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, LXSS_KEY) as root:
            index = 0
            while True:
                try:
                    yield winreg.EnumKey(root, index)
                except OSError:
                    return
                index += 1

    def _read_profile(self, guid: str) -> InstanceProfile:
        winreg = self._winreg
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, f"{LXSS_KEY}\\{guid}") as key:
            return InstanceProfile(
                registry_key=guid,
                distribution_name=self._query(key, "DistributionName", ""),
                base_path=self._query(key, "BasePath", ""),
                flags=self._query(key, "Flags", 0),
                state=self._query(key, "State", 0),
                version=self._query(key, "Version", 0),
                default_uid=self._query(key, "DefaultUid", 0),
                package_family_name=self._query(key, "PackageFamilyName", ""),
                kernel_command_line=self._query(key, "KernelCommandLine", ""),
                default_environment=list(self._query(key, "DefaultEnvironment", [])),
            )

    def get_profile(self, name: str) -> InstanceProfile:
        try:
            for guid in self._iter_profile_keys():
                profile = self._read_profile(guid)
                if profile.distribution_name.lower() == name.lower():
                    return profile
        except OSError as exc:
            raise ProfileLookupError(f"Could not read WSL profiles: {exc}") from exc
        raise ProfileLookupError(f"No WSL profile found for {name!r}")

    def write_profile(self, profile: InstanceProfile) -> None:
        if not profile.registry_key:
            raise ProfileWriteError(
                f"Profile for {profile.distribution_name!r} has no registry key"
            )
        winreg = self._winreg
        values: list[tuple[str, int, Any]] = [
            ("DistributionName", winreg.REG_SZ, profile.distribution_name),
            ("BasePath", winreg.REG_SZ, profile.base_path),
            ("Flags", winreg.REG_DWORD, profile.flags),
            ("State", winreg.REG_DWORD, profile.state),
            ("Version", winreg.REG_DWORD, profile.version),
            ("DefaultUid", winreg.REG_DWORD, profile.default_uid),
        ]
        if profile.package_family_name:
            values.append(("PackageFamilyName", winreg.REG_SZ, profile.package_family_name))
        if profile.kernel_command_line:
            values.append(("KernelCommandLine", winreg.REG_SZ, profile.kernel_command_line))
        if profile.default_environment:
            values.append(
                ("DefaultEnvironment", winreg.REG_MULTI_SZ, profile.default_environment)
            )

        logger.info("Writing profile %s (flags=0x%x)", profile.registry_key, profile.flags)
        try:
            with winreg.CreateKeyEx(
                winreg.HKEY_CURRENT_USER,
                f"{LXSS_KEY}\\{profile.registry_key}",
                0,
                winreg.KEY_SET_VALUE,
            ) as key:
                for value_name, value_type, value in values:
                    winreg.SetValueEx(key, value_name, 0, value_type, value)
        except OSError as exc:
            raise ProfileWriteError(
                f"Could not write profile for {profile.distribution_name!r}: {exc}"
            ) from exc
