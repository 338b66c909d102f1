from dataclasses import dataclass
from typing import Any


DEFAULT_MARKER_FIELD = "customJson"
DEFAULT_SEPARATOR = "-"


@dataclass(frozen=True)
class CaptureConfig:
    # marker_field is the only wire contract mod authors see; keep the default stable
    marker_field: str = DEFAULT_MARKER_FIELD
    separator: str = DEFAULT_SEPARATOR
    log_summary: bool = True

    @classmethod
    def from_payload(cls, payload: Any) -> "CaptureConfig":
        """
        Accepts:
          - None
          - "myMarker"                      (marker field name only)
          - {"marker_field": "...", "separator": "-", "log_summary": false}
        Also tolerates {"marker": "..."}.
        """
        if payload is None:
            return cls()

        if isinstance(payload, str):
            return cls(marker_field=payload) if payload.strip() else cls()

        if isinstance(payload, dict):
            marker = payload.get("marker_field", payload.get("marker", DEFAULT_MARKER_FIELD))
            separator = payload.get("separator", DEFAULT_SEPARATOR)
            log_summary = payload.get("log_summary", True)

            if not isinstance(marker, str) or not marker.strip():
                marker = DEFAULT_MARKER_FIELD
            # an empty separator would make "ab"+"c" and "a"+"bc" collide
            if not isinstance(separator, str) or not separator:
                separator = DEFAULT_SEPARATOR

            return cls(
                marker_field=marker.strip(),
                separator=separator,
                log_summary=bool(log_summary),
            )

        return cls()

    def composite_key(self, scope: str, name: str) -> str:
        return f"{scope}{self.separator}{name}"
