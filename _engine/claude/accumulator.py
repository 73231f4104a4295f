from _engine.debug import DISABLED, DebugPrinter
from _types.errors import AllocationError


class ResponseAccumulator:
    """
    Collects a response body delivered in chunks of arbitrary size.

    Chunks are appended in arrival order; the body is only complete once
    the transport finishes reading, and is never handed out before that.
    """

    def __init__(self, debug: DebugPrinter = DISABLED):
        self._buffer = bytearray()
        self._debug = debug

    def __len__(self) -> int:
        return len(self._buffer)

    def append(self, chunk: bytes) -> int:
        """
        Append one chunk and return the number of bytes taken.

        Raises:
            AllocationError: If the buffer could not grow to fit the chunk.
        """
        try:
            self._buffer += chunk
        except MemoryError as e:
            raise AllocationError(
                f"Not enough memory to grow response buffer past {len(self._buffer)} bytes"
            ) from e
        self._debug(
            f"Received {len(chunk)} bytes from API, total size: {len(self._buffer)}"
        )
        return len(chunk)

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def to_text(self) -> str:
        """Decode the body as UTF-8, replacing invalid sequences."""
        return self._buffer.decode("utf-8", errors="replace")
