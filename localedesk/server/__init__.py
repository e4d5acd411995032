"""Key-intake server — Flask endpoint and its start/stop lifecycle."""

from localedesk.server.intake_server import IntakeServer
from localedesk.server.key_intake import create_intake_app

__all__ = [
    "IntakeServer",
    "create_intake_app",
]
