"""Intake server lifecycle — stopped ↔ running on a loopback port.

Runs werkzeug's WSGI server for the key-intake app in a daemon thread.
Requests are handled one at a time on that thread; file access is
serialized against the UI by the editor's per-path locks.
"""

from __future__ import annotations

import logging
import socket
import threading

from werkzeug.serving import BaseWSGIServer, make_server

from localedesk.constants import DEFAULT_SERVER_PORT, SERVER_HOST
from localedesk.core.catalog_editor import CatalogEditor
from localedesk.models.catalog import ServerStatus, is_valid_port
from localedesk.server.key_intake import KeysReceivedCallback, create_intake_app

logger = logging.getLogger(__name__)


def _check_port_free(host: str, port: int) -> None:
    """Raise OSError if ``port`` cannot be bound on ``host``."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))


class IntakeServer:
    """Start/stop/status state machine for the key-intake endpoint.

    Usage::

        server = IntakeServer(editor, on_keys_received=callback)
        server.start(5874)     # raises OSError if the port is taken
        server.status()        # ServerStatus(running=True, port=5874)
        server.stop()
    """

    def __init__(
        self,
        editor: CatalogEditor,
        on_keys_received: KeysReceivedCallback | None = None,
        port: int = DEFAULT_SERVER_PORT,
    ):
        self._app = create_intake_app(editor, on_keys_received)
        self._port = port
        self._server: BaseWSGIServer | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def app(self):
        return self._app

    def status(self) -> ServerStatus:
        return ServerStatus(running=self._server is not None, port=self._port)

    def start(self, port: int | None = None) -> ServerStatus:
        """Bind and serve; a running server is left as is.

        Raises:
            OSError: If the port cannot be bound. The server stays stopped.
        """
        with self._lock:
            if self._server is not None:
                return self.status()
            if port is None:
                port = self._port

            if not is_valid_port(port):
                raise OSError(f"Invalid port: {port!r}")
            if port:
                _check_port_free(SERVER_HOST, port)
            try:
                server = make_server(SERVER_HOST, port, self._app, threaded=False)
            except SystemExit as e:
                # werkzeug exits the process when the bind fails
                raise OSError(f"Cannot bind {SERVER_HOST}:{port}") from e
            self._port = server.server_port
            self._server = server
            self._thread = threading.Thread(
                target=server.serve_forever,
                name="key-intake-server",
                daemon=True,
            )
            self._thread.start()
            logger.info("Key-intake server listening on http://%s:%d",
                        SERVER_HOST, self._port)
            return self.status()

    def stop(self) -> ServerStatus:
        with self._lock:
            server, thread = self._server, self._thread
            if server is None:
                return self.status()
            server.shutdown()
            server.server_close()
            if thread is not None:
                thread.join()
            self._server = None
            self._thread = None
            logger.info("Key-intake server stopped")
            return self.status()
