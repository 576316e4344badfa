"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "halforms"
APP_AUTHOR = "halforms"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_SERVICE_URL = "HALFORMS_URL"
ENV_SERVICE_PROFILE = "HALFORMS_PROFILE"
ENV_TIMEOUT = "HALFORMS_TIMEOUT"

# Media types sent in the default Accept header, most preferred first
ACCEPTED_CONTENT_TYPES = (
    "application/prs.hal-forms+json",
    "application/hal+json",
)

# Statuses that never carry a document
NO_BODY_STATUSES = frozenset({204, 205, 304})

# HAL-FORMS template defaults
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_METHOD = "GET"

DEFAULT_TIMEOUT = 30.0
