"""
Custom JSON fields for content definitions.

Definition files may carry a "customJson" object next to their standard
fields. Once the hooks are installed on the host's parser and loader,
those fields are captured during load and can be read back with:

    from jsonlib import get_integer
    get_integer("mymod-turret1", "power")
"""
from jsonlib.core.capture import (
    CaptureConfig,
    CaptureSession,
    HookInstallError,
    ModScopeUnavailableError,
    WiringError,
    get_default_session,
    install,
)
from jsonlib.core.store.query import (
    get,
    get_boolean,
    get_fields,
    get_float,
    get_integer,
    get_raw,
    get_string,
)
from jsonlib.core.store.summary import log_summary

__version__ = "0.3.0"

__all__ = [
    "CaptureConfig",
    "CaptureSession",
    "HookInstallError",
    "ModScopeUnavailableError",
    "WiringError",
    "get",
    "get_boolean",
    "get_default_session",
    "get_fields",
    "get_float",
    "get_integer",
    "get_raw",
    "get_string",
    "install",
    "log_summary",
]
