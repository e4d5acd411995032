"""Application-wide constants."""

import re
from pathlib import Path

APP_NAME = "LocaleDesk"
APP_VERSION = "0.1.0"
APP_ORGANIZATION = "LocaleDesk"

# Window constraints
MIN_WINDOW_WIDTH = 1100
MIN_WINDOW_HEIGHT = 700

# Settings persistence
SETTINGS_DIR = Path.home() / ".localedesk"
SETTINGS_FILENAME = "settings.json"
TRANSLATION_CACHE_FILENAME = "translation-cache.json"
TRANSLATION_USAGE_FILENAME = "translation-usage.json"

# Catalog layout
LOCALE_PATTERN = re.compile(r"^[a-z]{2}-[A-Z]{2}$")
LOCALE_JSON_PATTERN = re.compile(r"^[a-z]{2}-[A-Z]{2}\.json$")
DEFAULT_NAMESPACE = "default"
JSON_EXTENSION = ".json"
JSON_INDENT = 2
KEY_SEPARATOR = "."

# Key-intake server
DEFAULT_SERVER_PORT = 5874
SERVER_HOST = "127.0.0.1"
MIN_PORT = 1
MAX_PORT = 65535

# UI debounce delays [ms]
SAVE_DEBOUNCE_MS = 400
SUGGESTION_DEBOUNCE_MS = 500
SEARCH_DEBOUNCE_MS = 200

# DeepL machine translation
DEEPL_TRANSLATE_URL = "https://api-free.deepl.com/v2/translate"
DEEPL_USAGE_URL = "https://api-free.deepl.com/v2/usage"
DEEPL_TIMEOUT_S = 15.0
DEEPL_DEFAULT_CHARACTER_LIMIT = 500_000
USAGE_RESET_DAYS = 30
