"""Constants for smartthings_air."""

from logging import Logger, getLogger

LOGGER: Logger = getLogger(__package__)

DOMAIN = "smartthings_air"
MANUFACTURER = "Samsung SmartThings"

# Config entry keys
CONF_TOKEN = "token"
CONF_UPDATE_INTERVAL = "update_interval"
CONF_MIN_TEMPERATURE = "min_temperature"
CONF_MAX_TEMPERATURE = "max_temperature"

DEFAULT_UPDATE_INTERVAL = 15  # seconds
DEFAULT_MIN_TEMPERATURE = 16
DEFAULT_MAX_TEMPERATURE = 30
TEMPERATURE_STEP = 1

UNKNOWN = "unknown"
MAIN_COMPONENT = "main"

# Capabilities
CAP_SWITCH = "switch"
CAP_TEMPERATURE_MEASUREMENT = "temperatureMeasurement"
CAP_COOLING_SETPOINT = "thermostatCoolingSetpoint"
CAP_AIR_CONDITIONER_MODE = "airConditionerMode"
CAP_AIR_QUALITY = "airQualitySensor"
CAP_FAN_MODE = "fanMode"

# Reported in place of missing capabilities when no kind matches the category
UNSUPPORTED_CATEGORY = "unsupportedCategory"

# Purifier fan mode that maps to automatic operation
PURIFIER_AUTO_MODE = "smart"
