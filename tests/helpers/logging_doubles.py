"""Logger double recording femtologging ``log`` calls."""

from __future__ import annotations


class FakeLogger:
    """Collects log calls for assertions.

    Each call is recorded as ``(level, message, exc_info, stack_info)``.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object | None, bool]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message, exc_info, stack_info))
        return message

    @property
    def levels(self) -> list[str]:
        """Return the recorded levels in call order."""
        return [call[0] for call in self.calls]

    @property
    def messages(self) -> list[str]:
        """Return the recorded messages in call order."""
        return [call[1] for call in self.calls]
