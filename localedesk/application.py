"""Application factory — QApplication creation and font setup."""

import logging

from PyQt6.QtCore import QtMsgType, qInstallMessageHandler
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QApplication

from localedesk.constants import APP_NAME, APP_ORGANIZATION, APP_VERSION

logger = logging.getLogger("localedesk.qt")


def _qt_message_handler(msg_type, context, message):
    """Route Qt warnings into logging, dropping startup QPainter noise."""
    if "QPainter" in message:
        return
    if msg_type == QtMsgType.QtWarningMsg:
        logger.warning(message)
    elif msg_type in (QtMsgType.QtCriticalMsg, QtMsgType.QtFatalMsg):
        logger.error(message)


def create_application(argv: list[str]) -> QApplication:
    """Create and configure the QApplication instance."""
    qInstallMessageHandler(_qt_message_handler)

    app = QApplication(argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(APP_ORGANIZATION)

    font = QFont("Segoe UI", 10)
    font.setStyleHint(QFont.StyleHint.SansSerif)
    app.setFont(font)

    return app
