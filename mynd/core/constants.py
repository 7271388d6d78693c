"""
FILE: mynd/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - HOME_ENV_VAR, LOG_LEVEL_ENV_VAR
  - SAVE_FILE_FORMATS, DEFAULT_SAVE_FILE_FORMAT
  - DATA_FILE_NAMES: default data file name per save format
  - LOG_LEVELS, DEFAULT_LOG_LEVEL
  - MIN_ID_PREFIX: shortest id prefix accepted as a todo reference
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Centralized constants to avoid magic strings
"""

# Environment overrides
HOME_ENV_VAR = "MYND_HOME"
LOG_LEVEL_ENV_VAR = "MYND_LOG_LEVEL"

# Save file formats ("binary" is gzip-compressed JSON)
SAVE_FORMAT_JSON = "json"
SAVE_FORMAT_BINARY = "binary"
SAVE_FILE_FORMATS = (SAVE_FORMAT_JSON, SAVE_FORMAT_BINARY)
DEFAULT_SAVE_FILE_FORMAT = SAVE_FORMAT_JSON

DATA_FILE_NAMES = {
    SAVE_FORMAT_JSON: "todos.json",
    SAVE_FORMAT_BINARY: "todos.json.gz",
}

CONFIG_FILE_NAME = "config.toml"
LOGS_DIR_NAME = "logs"

# Logging
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LOG_LEVEL = "WARNING"
LOG_RETENTION_DAYS = 7

# Todo references
MIN_ID_PREFIX = 4
