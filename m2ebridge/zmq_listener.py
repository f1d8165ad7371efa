"""Local control channel answering simple requests over a ZeroMQ REP socket."""

from __future__ import annotations

import enum
import logging
import threading
from importlib.metadata import PackageNotFoundError, version

import zmq

from m2ebridge.config import GlobalConfig

log = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "ipc:///tmp/m2eb-zmq.sock"
GREETING = "Hello from m2e-bridge"
_POLL_INTERVAL_MS = 100

try:
    API_VERSION = version("m2ebridge")
except PackageNotFoundError:
    API_VERSION = "0.0.0"


class ZmqRequest(enum.Enum):
    """Requests understood by the control channel."""

    API_VERSION = "api_version"
    STATUS = "status"
    SET_API_AUTH_ON = "set_api_auth_on"
    SET_API_AUTH_OFF = "set_api_auth_off"
    NONE = ""


def zmq_request_from_string(request: str) -> ZmqRequest:
    """Map a request text to a :class:`ZmqRequest`; unknown text gives NONE."""
    if not request:
        return ZmqRequest.NONE
    try:
        return ZmqRequest(request)
    except ValueError:
        return ZmqRequest.NONE


class ZmqListener:
    """Serves control requests on a background thread.

    Each received message is decoded as a request, answered with
    :meth:`get_response`, and the reply is sent back on the same socket.
    """

    _instance: ZmqListener | None = None
    _instance_lock = threading.Lock()

    def __init__(self, config: GlobalConfig | None = None, endpoint: str = DEFAULT_ENDPOINT):
        self.config = config
        self.endpoint = endpoint
        self.bound_endpoint: str | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._context: zmq.Context | None = None
        self._socket: zmq.Socket | None = None

    @classmethod
    def get_instance(cls, config: GlobalConfig | None = None) -> ZmqListener:
        """Return the process-wide listener, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls(config)
            return cls._instance

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Bind the socket and start serving; does nothing if already started."""
        if self._thread is not None:
            return
        self._stop.clear()
        self._context = zmq.Context(2)
        self._socket = self._context.socket(zmq.REP)
        try:
            self._socket.bind(self.endpoint)
        except zmq.ZMQError:
            self._socket.close(linger=0)
            self._context.term()
            self._socket = None
            self._context = None
            raise
        self.bound_endpoint = self._socket.getsockopt_string(zmq.LAST_ENDPOINT)
        self._thread = threading.Thread(target=self._run, name="zmq-listener", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop serving and release the socket; safe to call when not started."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        if self._socket is not None:
            self._socket.close(linger=0)
            self._socket = None
        if self._context is not None:
            self._context.term()
            self._context = None

    def _run(self) -> None:
        sock = self._socket
        poller = zmq.Poller()
        poller.register(sock, zmq.POLLIN)
        try:
            while not self._stop.is_set():
                events = dict(poller.poll(_POLL_INTERVAL_MS))
                if sock not in events:
                    continue
                received = sock.recv().decode("utf-8", errors="replace")
                log.info("Received Zeromq request: %s", received)
                reply = self.get_response(zmq_request_from_string(received))
                sock.send(reply.encode("utf-8"))
        except zmq.ContextTerminated:
            log.info("Zeromq Interrupted")
        except zmq.ZMQError as exc:
            log.error("Zeromq Error: %s", exc)
        except Exception as exc:  # keep the channel from dying silently
            log.error("Zeromq Exception: %s", exc)
        finally:
            sock.close(linger=0)
            log.info("Zeromq Shutting down...")

    def get_response(self, req: ZmqRequest) -> str:
        """Return the reply text for ``req``."""
        if req is ZmqRequest.API_VERSION:
            return API_VERSION
        if req is ZmqRequest.STATUS:
            return "running"
        if req in (ZmqRequest.SET_API_AUTH_ON, ZmqRequest.SET_API_AUTH_OFF):
            if self.config is None:
                return "fail"
            enabled = req is ZmqRequest.SET_API_AUTH_ON
            return "ok" if self.config.set_api_authentication(enabled) else "fail"
        return GREETING