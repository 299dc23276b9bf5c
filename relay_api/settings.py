# settings.py

import os
from dotenv import load_dotenv

load_dotenv()

APP_NAME = os.getenv("APP_NAME", "Spandex Salvation Radio")
APP_VERSION = os.getenv("APP_VERSION", "1.0")

# Station used when /stream is requested without ?url=
DEFAULT_STATION_URL = os.getenv(
    "DEFAULT_STATION_URL",
    "https://playerservices.streamtheworld.com/api/livestream-redirect/KBFBFMAAC.aac",
)
# Always the last candidate for an unregistered URL
LAST_RESORT_STREAM = os.getenv("LAST_RESORT_STREAM", "https://ice1.somafm.com/metal-128-mp3")
# Optional JSON list of stations replacing the built-in table
STATIONS_FILE = os.getenv("STATIONS_FILE")

# Per attempt, not cumulative
RELAY_CONNECT_TIMEOUT = float(os.getenv("RELAY_CONNECT_TIMEOUT", "10"))
RELAY_READ_TIMEOUT = float(os.getenv("RELAY_READ_TIMEOUT", "10"))
RELAY_CHUNK_SIZE = int(os.getenv("RELAY_CHUNK_SIZE", str(64 * 1024)))
RELAY_USER_AGENT = os.getenv("RELAY_USER_AGENT", f"SpandexRelay/{APP_VERSION}")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
