"""
HTTP Reporter

Uploads a URL-encoded event payload to the collection endpoint on a
background thread. One reporter handles one transfer at a time; create a new
reporter per event.
"""

import http.client
import ssl
import threading
import urllib.error
import urllib.request
from concurrent.futures import Future
from typing import Callable, Optional

from ..errors import ReporterBusyError, TransportError
from .transport import TLSTransport, get_default_transport

# Google Analytics Measurement Protocol endpoint
TRACKING_URL = "https://www.google-analytics.com/collect"

USER_AGENT = "Publisher-Analytics/1.0"


class SendResult:
    """Outcome of a single delivery attempt"""

    def __init__(self, body: Optional[str] = None, error: Optional[Exception] = None):
        self.body = body
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self):
        if self.ok:
            return f"SendResult(ok, body={self.body!r})"
        return f"SendResult(error={self.error!r})"


class HTTPReporter:
    """Fire-and-forget HTTP delivery of a single event payload"""

    def __init__(self, url: str = TRACKING_URL, transport: Optional[TLSTransport] = None,
                 timeout: Optional[float] = None):
        """
        Initialize HTTP reporter

        Args:
            url: Collection endpoint URL
            transport: TLS strategy (default: certifi CA bundle)
            timeout: Socket timeout in seconds (None = transport default)
        """
        if not url:
            raise ValueError("Url is null or empty")

        self.url = url
        self.transport = transport or get_default_transport()
        self.timeout = timeout

        self._lock = threading.Lock()
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def send(self, payload: str, on_complete: Optional[Callable[[SendResult], None]] = None) -> "Future[SendResult]":
        """
        Start uploading payload in a background thread

        Args:
            payload: URL-encoded event payload
            on_complete: Called once with the SendResult, on the worker thread

        Returns:
            Future resolving to a SendResult (never raises)

        Raises:
            ReporterBusyError: If a transfer is already in flight
        """
        self._acquire()

        future = Future()
        if on_complete is not None:
            future.add_done_callback(lambda f: on_complete(f.result()))

        # Transfers cannot be cancelled once dispatched
        future.set_running_or_notify_cancel()

        thread = threading.Thread(target=self._run, args=(payload, future), daemon=True)
        try:
            thread.start()
        except RuntimeError as e:
            self._release()
            future.set_result(SendResult(error=TransportError(f"Could not start sender thread: {e}")))
        return future

    def send_blocking(self, payload: str) -> SendResult:
        """Upload payload on the calling thread"""
        self._acquire()
        try:
            return self._deliver(payload)
        finally:
            self._release()

    def _acquire(self):
        with self._lock:
            if self._in_flight:
                raise ReporterBusyError("Already sending something")
            self._in_flight = True

    def _release(self):
        with self._lock:
            self._in_flight = False

    def _run(self, payload: str, future: Future):
        try:
            result = self._deliver(payload)
        finally:
            # Free the reporter before callbacks run so they may reuse it
            self._release()
        future.set_result(result)

    def _deliver(self, payload: str) -> SendResult:
        """Perform the request and map every failure to TransportError"""
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": USER_AGENT,
        }
        req = urllib.request.Request(
            self.url,
            data=payload.encode('utf-8'),
            headers=headers,
            method='POST'
        )

        try:
            with self.transport.open(req, self.timeout) as response:
                status = response.status
                body = response.read().decode('utf-8', errors='replace')
        except urllib.error.HTTPError as e:
            return SendResult(error=TransportError(f"HTTP error: {e.code} - {e.reason}", status=e.code))
        except urllib.error.URLError as e:
            return SendResult(error=TransportError(f"Connection error: {e.reason}"))
        except ssl.SSLError as e:
            return SendResult(error=TransportError(f"TLS error: {e}"))
        except TimeoutError as e:
            return SendResult(error=TransportError(f"Request timed out: {e}"))
        except (OSError, http.client.HTTPException) as e:
            return SendResult(error=TransportError(f"Connection error: {e}"))
        except Exception as e:
            return SendResult(error=TransportError(f"Unexpected error: {e}"))

        if not 200 <= status < 300:
            return SendResult(error=TransportError(f"HTTP {status}", status=status))
        return SendResult(body=body)
