"""Package-wide constants."""

# Option defaults
DEFAULT_SERVER = "s3.amazonaws.com"
DEFAULT_PROTOCOL = "https"
DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRY_COUNT = 4
DEFAULT_PERMISSIONS = "private"

# Supported URL schemes and their ports
PROTOCOL_PORTS = {
    "http": 80,
    "https": 443,
}

# Upper bound on redirects followed for one logical operation
MAX_REDIRECTS = 10
