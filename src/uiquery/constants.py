"""Global constants."""

# Timeouts (seconds)
ELEMENT_EXISTENCE_TIMEOUT = 5.0
NAVIGATION_TIMEOUT = 30.0
FIRE_ANIMATION_TIMEOUT = 30.0
LOCAL_TEST_SERVER_TIMEOUT = 15.0

DEFAULT_POLL_INTERVAL = 0.05

CONFIG_ENV_VAR = "UIQUERY_CONFIG"
DEFAULT_LOG_TAIL = 20
MAX_LOG_ENTRIES = 1000

# %f precision
FLOAT_TOLERANCE = 1e-6

TRUTHY_STRINGS = frozenset({"1", "true", "on", "yes"})
FALSY_STRINGS = frozenset({"0", "false", "off", "no"})
