from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from jsonlib.core.store.summary import log_summary

from .errors import HookInstallError
from .identity_intercept import IdentityIntercept
from .parse_intercept import ParseIntercept
from .session import CaptureSession, get_default_session

log = logging.getLogger("jsonlib.wiring")

_MISSING = object()


def _declares(obj: Any, attr: str) -> bool:
    # never evaluate the attribute here: a scope property raises outside a load
    return attr in getattr(obj, "__dict__", {}) or any(attr in vars(k) for k in type(obj).__mro__)


def _require_callable(obj: Any, attr: str, what: str) -> Callable[..., Any]:
    if not _declares(obj, attr):
        raise HookInstallError(f"{type(obj).__name__} has no {what} hook '{attr}'")
    fn = getattr(obj, attr)
    if not callable(fn):
        raise HookInstallError(f"{type(obj).__name__}.{attr} ({what}) is not callable")
    if isinstance(fn, (ParseIntercept, IdentityIntercept)):
        raise HookInstallError(f"{type(obj).__name__}.{attr} is already intercepted")
    return fn


@dataclass
class InstalledHooks:
    session: CaptureSession
    parser: Any
    loader: Any
    parse_intercept: ParseIntercept
    identity_intercept: IdentityIntercept
    deserializer_attr: str
    lookup_attr: str
    _saved: Dict[str, Any] = field(default_factory=dict, repr=False)
    installed: bool = True

    def load_complete(self) -> None:
        if self.session.config.log_summary:
            log_summary(self.session)

    def uninstall(self) -> None:
        if not self.installed:
            return
        for (target, attr) in ((self.parser, self.deserializer_attr), (self.loader, self.lookup_attr)):
            original = self._saved.get(f"{id(target)}:{attr}", _MISSING)
            if original is _MISSING:
                # original came from the class; dropping the instance attribute restores it
                target.__dict__.pop(attr, None)
            else:
                setattr(target, attr, original)
        self.installed = False
        log.info("Custom JSON hooks uninstalled from %s/%s", type(self.parser).__name__, type(self.loader).__name__)


def install(
    parser: Any,
    loader: Any,
    session: Optional[CaptureSession] = None,
    *,
    deserializer_attr: str = "deserializer",
    lookup_attr: str = "get_by_name",
    scope_attr: str = "current_mod",
    scope_accessor: Optional[Callable[[], Any]] = None,
) -> InstalledHooks:
    """
    Swap the host's deserializer and name lookup for capture intercepts.

    `parser.<deserializer_attr>` must be the callable that turns a parsed
    JSON node into content, `loader.<lookup_attr>` the name -> content
    lookup, and `parser.<scope_attr>` (or `scope_accessor`) must yield the
    name of the mod being loaded. Anything missing raises HookInstallError
    and leaves the host untouched.
    """
    s = session or get_default_session()

    deserializer = _require_callable(parser, deserializer_attr, "deserializer")
    lookup = _require_callable(loader, lookup_attr, "lookup")

    if scope_accessor is None:
        if not _declares(parser, scope_attr):
            raise HookInstallError(f"{type(parser).__name__} has no mod scope attribute '{scope_attr}'")

        def scope_accessor() -> Any:
            return getattr(parser, scope_attr)

    parse_intercept = ParseIntercept(deserializer, scope_accessor, session=s)
    identity_intercept = IdentityIntercept(lookup, session=s)

    saved: Dict[str, Any] = {}
    for (target, attr) in ((parser, deserializer_attr), (loader, lookup_attr)):
        if attr in getattr(target, "__dict__", {}):
            saved[f"{id(target)}:{attr}"] = target.__dict__[attr]

    try:
        setattr(parser, deserializer_attr, parse_intercept)
        setattr(loader, lookup_attr, identity_intercept)
    except AttributeError as e:
        # never leave the host half wired
        if getattr(parser, deserializer_attr, None) is parse_intercept:
            parser.__dict__.pop(deserializer_attr, None)
            if f"{id(parser)}:{deserializer_attr}" in saved:
                setattr(parser, deserializer_attr, saved[f"{id(parser)}:{deserializer_attr}"])
        raise HookInstallError(f"Cannot replace host hooks: {e}") from e

    log.info(
        "Custom JSON hooks installed marker=%s on %s.%s and %s.%s",
        s.config.marker_field,
        type(parser).__name__,
        deserializer_attr,
        type(loader).__name__,
        lookup_attr,
    )

    return InstalledHooks(
        session=s,
        parser=parser,
        loader=loader,
        parse_intercept=parse_intercept,
        identity_intercept=identity_intercept,
        deserializer_attr=deserializer_attr,
        lookup_attr=lookup_attr,
        _saved=saved,
    )
