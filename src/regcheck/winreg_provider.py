"""WinRegProvider — KeyValueProvider backed by the live Windows registry."""

from __future__ import annotations

import logging
from types import ModuleType

from .errors import ProviderError
from .hives import split_hive
from .provider import Found, LookupResult, NotFound
from .values import ValueKind, from_native

logger = logging.getLogger(__name__)

# winreg REG_* constant name → ValueKind
_KIND_NAMES = {
    "REG_NONE": ValueKind.Unset,
    "REG_BINARY": ValueKind.Binary,
    "REG_DWORD": ValueKind.Dword,
    "REG_DWORD_BIG_ENDIAN": ValueKind.Dword,
    "REG_EXPAND_SZ": ValueKind.ExpandString,
    "REG_LINK": ValueKind.Link,
    "REG_MULTI_SZ": ValueKind.MultiString,
    "REG_QWORD": ValueKind.Qword,
    "REG_SZ": ValueKind.String,
}

# hive alias or full name → winreg HKEY_* attribute
_HIVE_NAMES = {
    "HKLM": "HKEY_LOCAL_MACHINE",
    "HKCU": "HKEY_CURRENT_USER",
    "HKCR": "HKEY_CLASSES_ROOT",
    "HKU": "HKEY_USERS",
    "HKCC": "HKEY_CURRENT_CONFIG",
}


class WinRegProvider:
    """Read values through ``winreg`` in the 32- or 64-bit registry view.

    *module* replaces the ``winreg`` module (for tests on other platforms).
    """

    def __init__(self, view: str = "64", module: ModuleType | None = None) -> None:
        if view not in ("32", "64"):
            raise ValueError(f"view must be '32' or '64', not {view!r}")
        if module is None:
            try:
                import winreg as module
            except ImportError as exc:
                raise ProviderError("the Windows registry is not available on this platform") from exc
        self.view = view
        self._winreg = module
        wow = module.KEY_WOW64_64KEY if view == "64" else module.KEY_WOW64_32KEY
        self._access = module.KEY_READ | wow
        self._kinds = {
            getattr(module, name): kind
            for name, kind in _KIND_NAMES.items()
            if hasattr(module, name)
        }

    def _root(self, hive: str):
        """The winreg handle for *hive*, or None if the registry has no such hive."""
        name = _HIVE_NAMES.get(hive.upper(), hive.upper())
        return getattr(self._winreg, name, None) if name.startswith("HKEY_") else None

    def lookup(self, path: str, name: str) -> LookupResult:
        hive, subkey = split_hive(path)
        root = self._root(hive)
        if root is None:
            logger.debug("unknown hive %r in %s", hive, path)
            return NotFound
        try:
            with self._winreg.OpenKey(root, subkey, 0, self._access) as key:
                data, reg_type = self._winreg.QueryValueEx(key, name)
        except FileNotFoundError:
            logger.debug("not found: %s\\%s", path, name)
            return NotFound
        except OSError as exc:
            raise ProviderError(f"cannot read {path}\\{name}: {exc}") from exc
        return Found(from_native(data), self._kinds.get(reg_type, ValueKind.Binary))
