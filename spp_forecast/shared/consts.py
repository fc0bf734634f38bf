from enum import Enum

DEFAULT_SETTLEMENT_POINT = "HB_WEST"
DEFAULT_MARKET_TIMEZONE = "America/Chicago"
DATA_MODE = "ercot-np6-905"


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
