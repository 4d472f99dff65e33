"""Shared constants for siteprov."""

from pathlib import Path

# Site defaults (overridable via SITE_NAME / WEB_ROOT / TZ)
DEFAULT_SITE_NAME = "basic-site"
WEB_ROOT_BASE = Path("/var/www")
DEFAULT_TZ = "UTC"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

# NGINX / TLS paths
NGINX_DIR = Path("/etc/nginx")
SSL_DIR = Path("/etc/ssl")
NGINX_SERVICE = "nginx"
WEB_USERS = ("www-data", "nginx")

# Self-signed certificate parameters
CERT_DAYS = 365
CERT_KEY_BITS = 2048

# Public IP discovery
IMDS_BASE = "http://169.254.169.254/latest"
IMDS_TOKEN_URL = f"{IMDS_BASE}/api/token"
IMDS_PUBLIC_IP_URL = f"{IMDS_BASE}/meta-data/public-ipv4"
IMDS_TOKEN_TTL = "21600"
IP_ECHO_URL = "https://checkip.amazonaws.com"
SERVER_NAME_PLACEHOLDER = "YOUR_PUBLIC_IP"

# Timeouts (seconds)
METADATA_TIMEOUT = 2.0
IP_ECHO_TIMEOUT = 5.0
LOCAL_PROBE_TIMEOUT = 5.0
PUBLIC_PROBE_TIMEOUT = 3.0

# Packages
BASE_PACKAGES = ("nginx", "curl", "openssl")
CERTBOT_PACKAGES = ("certbot", "python3-certbot-nginx")
