"""Key-intake endpoint — Flask app receiving missing keys from client apps.

i18next's ``saveMissing`` backend posts to::

    POST /locales/<lng>/<ns>   {"key": "a.b.c", "defaultValue": "text"}

Each reported key is registered in every configured language; the
callback fires only when something new was added.
"""

from __future__ import annotations

import json
import logging
from typing import Callable

from flask import Flask, jsonify, request
from werkzeug.exceptions import MethodNotAllowed, NotFound

from localedesk.core.catalog_editor import CatalogEditor

logger = logging.getLogger(__name__)

KeysReceivedCallback = Callable[[str, list[str]], None]

NOT_FOUND_MESSAGE = "Not found. Use POST /locales/:lng/:ns"


def _error(message: str, status: int):
    response = jsonify({"error": message})
    response.status_code = status
    return response


def create_intake_app(
    editor: CatalogEditor,
    on_keys_received: KeysReceivedCallback | None = None,
) -> Flask:
    """Build the WSGI app serving the key-intake endpoint.

    Args:
        editor: Mutation engine shared with the UI.
        on_keys_received: Called with (namespace, keys) after new keys
            were added.
    """
    app = Flask(__name__)

    @app.before_request
    def _preflight():
        if request.method == "OPTIONS":
            return "", 204
        return None

    @app.after_request
    def _cors(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def _not_found(_err):
        return _error(NOT_FOUND_MESSAGE, 404)

    @app.post("/locales/<lang_code>/<namespace>")
    def receive_key(lang_code: str, namespace: str):
        try:
            body = json.loads(request.get_data(as_text=True))
        except ValueError:
            return _error("Invalid JSON body", 400)

        key = body.get("key") if isinstance(body, dict) else None
        if not isinstance(key, str) or not key:
            return _error("Body must be a JSON object with a string 'key'", 400)

        default_value = body.get("defaultValue")
        added = editor.register_key(namespace, key, lang_code, default_value)
        if added:
            logger.info("Registered %s in namespace %s", ", ".join(added), namespace)
            if on_keys_received is not None:
                on_keys_received(namespace, added)

        return jsonify({"ok": True})

    return app
