"""
WowzaDeploy Constants

Centralized constants for remote paths, defaults, and configuration.
"""

# Remote Filesystem Layout
DEFAULT_WOWZA_BASE_PATH = "/usr/local/WowzaStreamingEngine-4.8.0/conf"
DEFAULT_STREAMING_HOME = "/home/streaming"

APPLICATION_XML = "Application.xml"
PUBLISH_PASSWORD_FILE = "publish.password"
ALIAS_MAP_PLAY_FILE = "aliasmap.play.txt"
ALIAS_MAP_STREAM_FILE = "aliasmap.stream.txt"

# Alias map target written for every application
ALIAS_MAP_TARGET = "teste2026"

# Default Streaming Limits
DEFAULT_MAX_BITRATE = 4500
DEFAULT_MAX_VIEWERS = 999999

# Default SSH Configuration
DEFAULT_SSH_USER = "root"
DEFAULT_SSH_PORT = 22
SSH_PASSWORD_ENV = "SSHPASS"
SSH_TRANSPORT_FAILURE_CODE = 255

# sshpass exit codes that mean the login itself failed
SSHPASS_FAILURE_MESSAGES = {
    5: "authentication failed (wrong root password)",
    6: "host public key is unknown",
}

# Diagnostic output containing this marker is not worth a warning
SSH_BENIGN_STDERR_MARKER = "Warning"

# Credential Store
DEFAULT_DATABASE_URL = "mysql+pymysql://root@localhost/streaming"
SERVERS_TABLE = "wowza_servers"
SERVER_STATUS_ACTIVE = "ativo"
SERVER_STATUS_INACTIVE = "inativo"

# Log Configuration
DEFAULT_LOG_DIR = "~/.wowzadeploy/logs"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Application.xml properties patched by update
BITRATE_PROPERTIES = (
    "limitPublishedStreamBandwidthMaxBitrate",
    "MaxBitrate",
)
VIEWER_PROPERTIES = (
    "limitStreamViewersMaxViewers",
    "securityPlayMaximumConnections",
)

# Remote existence probe output
REMOTE_EXISTS = "exists"
REMOTE_NOT_FOUND = "not found"

# Success Messages
SUCCESS_CONFIG_CREATED = "Wowza configuration created for: {name}"
SUCCESS_CONFIG_REMOVED = "Wowza configuration removed for: {name}"
SUCCESS_CONFIG_UPDATED = "Wowza configuration updated for: {name}"
