from __future__ import annotations

from typing import Any, Callable, Optional

from .errors import HookInstallError
from .session import CaptureSession, get_default_session


class IdentityIntercept:
    """
    Stands in for the host's name -> content lookup.

    The host lookup always runs first and its result (including a miss)
    is returned untouched. If a capture is pending on this thread, the
    looked-up name is taken as the identity of the entity that carried
    the marker and the batch is merged into the store under
    scope + separator + name. Only the first lookup after a capture binds.
    """

    def __init__(self, lookup: Callable[..., Any], session: Optional[CaptureSession] = None):
        if not callable(lookup):
            raise HookInstallError(f"Host lookup is not callable: {lookup!r}")
        self.lookup = lookup
        self.session = session or get_default_session()

    def __call__(self, name: str, *args: Any, **kwargs: Any) -> Any:
        result = self.lookup(name, *args, **kwargs)

        if self.session.pending.is_pending:
            # a lookup that resolves nothing still binds; the orphan bucket is harmless
            self.session.bind_pending(str(name))

        return result
