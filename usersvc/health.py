"""HTTP liveness endpoint backed by a set of ping checks."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

log = logging.getLogger(__name__)

HEALTH_PATH = "/healz"


class HealthApp:
    """Serves ``/healz``, answering 200 when every pinger succeeds and 500 otherwise."""

    def __init__(self, pingers: Sequence[Callable[[], object]], addr: str, port: str | int) -> None:
        self.pingers = list(pingers)
        self.host = addr
        self.port = int(port)
        self.addr = f"{addr}:{port}"
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def check(self) -> HTTPStatus:
        """Run every pinger concurrently and return the resulting HTTP status."""
        if not self.pingers:
            return HTTPStatus.OK
        with ThreadPoolExecutor(max_workers=len(self.pingers)) as pool:
            futures = [pool.submit(ping) for ping in self.pingers]
            failed = any(future.exception() is not None for future in futures)
        return HTTPStatus.INTERNAL_SERVER_ERROR if failed else HTTPStatus.OK

    @property
    def server_address(self) -> tuple[str, int] | None:
        """The address actually bound, once started."""
        if self._server is None:
            return None
        host, port = self._server.server_address[:2]
        return str(host), int(port)

    def _handler_class(self) -> type[BaseHTTPRequestHandler]:
        app = self

        class _Handler(BaseHTTPRequestHandler):
            def _respond(self) -> None:
                path = self.path.split("?", 1)[0]
                status = app.check() if path == HEALTH_PATH else HTTPStatus.NOT_FOUND
                self.send_response(status)
                self.send_header("Content-Length", "0")
                self.end_headers()

            do_GET = _respond
            do_HEAD = _respond
            do_POST = _respond

            def log_message(self, format: str, *args: object) -> None:
                log.debug(format, *args)

        return _Handler

    def start(self) -> None:
        """Start serving in a background thread; a bind failure is reported, not raised."""
        log.debug("health starting")
        print("health starting")
        try:
            self._server = ThreadingHTTPServer((self.host, self.port), self._handler_class())
        except OSError as exc:
            log.debug("err", extra={"err": str(exc)})
            print(str(exc))
            self._server = None
        else:
            self._thread = threading.Thread(
                target=self._server.serve_forever, name="health", daemon=True
            )
            self._thread.start()
        log.debug("health started")
        print("health started")

    def stop(self) -> None:
        """Shut the server down if it is running."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join()
        self._server = None
        self._thread = None