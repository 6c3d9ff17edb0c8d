"""Internal constants shared across the library."""

DEFAULT_ADDRESS = "192.168.1.100"
DEFAULT_DEVICE_NAME = "ESP32 Weather Station"
USER_AGENT = "pyweatherstation"

#: Seconds allowed for connect and for each read.
DEFAULT_REQUEST_TIMEOUT: float = 10.0
#: Seconds between periodic refreshes while the station is connected.
DEFAULT_POLL_INTERVAL: float = 30.0
DEFAULT_HISTORY_HOURS = 24

# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

PING_ENDPOINT = "/ping"
WEATHER_ENDPOINT = "/weather"
LOCATIONS_ENDPOINT = "/locations"
SET_LOCATION_ENDPOINT = "/location"
HISTORY_ENDPOINT = "/history"
STATUS_ENDPOINT = "/status"
