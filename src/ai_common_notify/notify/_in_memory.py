"""In-memory transport for testing (no OS notifications)."""

from __future__ import annotations

from ._platforms import PlatformOptions


class RecordingTransport:
    def __init__(self, result: bool = True, error: Exception | None = None) -> None:
        self.sent: list[PlatformOptions] = []
        self._result = result
        self._error = error

    async def send(self, options: PlatformOptions) -> bool:
        if self._error is not None:
            raise self._error
        self.sent.append(options)
        return self._result
