import contextlib
import socket
import threading
import time
from typing import Callable, Optional

import requests
from urllib3.exceptions import ReadTimeoutError

from _data.claude import (
    API_VERSION,
    CONNECT_TIMEOUT,
    MESSAGES_URL,
    READ_CHUNK_SIZE,
    TOTAL_TIMEOUT,
)
from _engine.claude.accumulator import ResponseAccumulator
from _engine.debug import DISABLED, DebugPrinter
from _types.errors import HttpStatusError, TransportError


def _response_socket(response: requests.Response) -> Optional[socket.socket]:
    """Socket a streamed response is still reading from, if it can be reached."""
    connection = getattr(response.raw, "connection", None)
    return getattr(connection, "sock", None)


class _Deadline:
    """
    Shuts the response socket down once the overall timeout has passed.

    A shut down socket reads as EOF, which unblocks a read that is stuck
    waiting on a stalled or trickling server.
    """

    def __init__(self, response: requests.Response, seconds: float):
        self.expired = False
        self._response = response
        self._timer = threading.Timer(max(seconds, 0), self._expire)
        self._timer.daemon = True

    def _expire(self) -> None:
        self.expired = True
        sock = _response_socket(self._response)
        if sock is not None:
            # Already closed sockets have nothing left to unblock
            with contextlib.suppress(OSError):
                sock.shutdown(socket.SHUT_RDWR)

    def __enter__(self) -> "_Deadline":
        self._timer.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self._timer.cancel()


def _is_read_timeout(error: requests.exceptions.RequestException) -> bool:
    # requests re-raises urllib3's ReadTimeoutError from iter_content as ConnectionError
    return bool(error.args) and isinstance(error.args[0], ReadTimeoutError)


class HttpTransport:
    """
    Performs the single POST to the messages endpoint.

    The connect timeout bounds connection setup; the total timeout bounds the
    whole exchange, including reading the streamed body. No retries.
    """

    def __init__(
        self,
        url: str = MESSAGES_URL,
        connect_timeout: float = CONNECT_TIMEOUT,
        total_timeout: float = TOTAL_TIMEOUT,
        debug: DebugPrinter = DISABLED,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.url = url
        self.connect_timeout = connect_timeout
        self.total_timeout = total_timeout
        self.debug = debug
        self.clock = clock

    def headers(self, api_key: str) -> dict:
        return {
            "content-type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": API_VERSION,
        }

    def _timed_out(self) -> TransportError:
        return TransportError(
            f"Request timed out after {self.total_timeout:g} seconds", timed_out=True
        )

    def post(self, api_key: str, body: bytes) -> str:
        """
        Send the request body and return the complete response body.

        Args:
            api_key (str): Value for the API-key header.
            body (bytes): Serialized JSON request.

        Returns:
            str: The response body of a 2xx response, decoded as UTF-8.

        Raises:
            TransportError: On DNS, TLS, connection or timeout failures.
            HttpStatusError: On any non-2xx status, with the raw body attached.
            AllocationError: If the body could not be buffered.
        """
        self.debug("Sending API request...")
        started = self.clock()
        deadline = started + self.total_timeout

        try:
            response = requests.post(
                self.url,
                data=body,
                headers=self.headers(api_key),
                timeout=(self.connect_timeout, self.total_timeout),
                stream=True,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}", timed_out=True) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}") from e

        accumulator = ResponseAccumulator(debug=self.debug)
        watchdog = _Deadline(response, deadline - self.clock())
        try:
            with watchdog:
                chunks = response.iter_content(chunk_size=READ_CHUNK_SIZE)
                while True:
                    if self.clock() > deadline:
                        raise self._timed_out()
                    chunk = next(chunks, None)
                    if chunk is None:
                        break
                    accumulator.append(chunk)
            if watchdog.expired:
                # The body may have ended early because the socket was shut down
                raise self._timed_out()
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}", timed_out=True) from e
        except requests.exceptions.RequestException as e:
            if watchdog.expired:
                raise self._timed_out() from e
            if _is_read_timeout(e):
                raise TransportError(f"Request timed out: {e}", timed_out=True) from e
            raise TransportError(f"Connection failed while reading response: {e}") from e
        finally:
            response.close()

        self.debug(f"API request completed in {self.clock() - started:.2f} seconds")
        status_code = response.status_code
        self.debug(f"HTTP response code: {status_code}")

        text = accumulator.to_text()
        if not 200 <= status_code < 300:
            raise HttpStatusError(status_code, text)

        self.debug(f"API response received (length: {len(accumulator)})")
        return text
