from __future__ import annotations


class WiringError(RuntimeError):
    """The capture hooks are not (or cannot be) connected to the host correctly."""


class ModScopeUnavailableError(WiringError):
    """The host could not tell which mod is being loaded when a marker was parsed."""


class HookInstallError(WiringError):
    pass
