from enum import Enum

DEFAULT_MIDDLEWARE_URL = "https://demo.volkszaehler.org/middleware.php"
MIDDLEWARE_SUFFIX = "/middleware.php"
ENTITY_PATH = "/entity.json"


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
