"""Convert summaries to JSON-ready builtins one field group at a time.

A field group that fails to convert is replaced by ``None`` and named in
the diagnostics, so one bad field never blanks the rest of the summary.

Usage
-----
>>> serialized = serialize_summary(summary)
>>> serialized.diagnostics
()
>>> serialized.data["totalReleases"]
3

"""

from __future__ import annotations

import typing as typ

import msgspec

from releasescope.logging import get_logger, log_warning

if typ.TYPE_CHECKING:
    from releasescope.aggregation.models import DashboardSummary

logger = get_logger(__name__)


class SerializedSummary(msgspec.Struct, kw_only=True, frozen=True):
    """Builtin rendering of a summary plus the groups that failed.

    Attributes
    ----------
    data
        Field groups keyed by wire name; failed groups map to ``None``.
    diagnostics
        One message per failed group.

    """

    data: dict[str, typ.Any]
    diagnostics: tuple[str, ...] = ()

    def to_media(self) -> dict[str, typ.Any]:
        """Return the ``{data, diagnostics}`` body served by the API."""
        return {"data": self.data, "diagnostics": list(self.diagnostics)}


def serialize_summary(summary: DashboardSummary) -> SerializedSummary:
    """Convert each field group of ``summary`` independently.

    Parameters
    ----------
    summary
        Summary to convert.

    Returns
    -------
    SerializedSummary
        Converted groups and a diagnostic for each group that failed.

    """
    data: dict[str, typ.Any] = {}
    diagnostics: list[str] = []
    for field in msgspec.structs.fields(summary):
        value = getattr(summary, field.name)
        try:
            data[field.encode_name] = msgspec.to_builtins(value)
        except (msgspec.EncodeError, TypeError, ValueError) as exc:
            log_warning(
                logger,
                "Omitting summary field %s: %s",
                field.encode_name,
                exc,
            )
            data[field.encode_name] = None
            diagnostics.append(f"{field.encode_name}: {exc}")
    return SerializedSummary(data=data, diagnostics=tuple(diagnostics))
