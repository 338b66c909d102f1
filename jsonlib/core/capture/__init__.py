from .config import CaptureConfig
from .errors import HookInstallError, ModScopeUnavailableError, WiringError
from .identity_intercept import IdentityIntercept
from .parse_intercept import ParseIntercept, extract_entries
from .pending import PendingCapture
from .session import CaptureSession, get_default_session
from .types import CapturedBatch, CaptureToken
from .wiring import InstalledHooks, install

__all__ = [
    "CaptureConfig",
    "CaptureSession",
    "CaptureToken",
    "CapturedBatch",
    "HookInstallError",
    "IdentityIntercept",
    "InstalledHooks",
    "ModScopeUnavailableError",
    "ParseIntercept",
    "PendingCapture",
    "WiringError",
    "extract_entries",
    "get_default_session",
    "install",
]
