"""Naming conventions and defaults for Anchor discriminators."""

GLOBAL_NAMESPACE = "global"
EVENT_NAMESPACE = "event"

# Reported when an IDL carries neither metadata nor a top-level name/version.
UNKNOWN = "Unknown"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
