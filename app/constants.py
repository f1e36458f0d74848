"""
Application Constants
=====================

Centralized constants to replace magic numbers throughout the codebase.
Organized by domain for easy discovery and maintenance.

Usage:
    from app.constants import APP_VERSION
    from app.constants import Timeouts, Pagination
"""

# =============================================================================
# Application metadata (served by /api/info)
# =============================================================================

APP_NAME = "Flowl"
APP_VERSION = "0.1.0"
APP_REPOSITORY = "https://github.com/flowl-app/flowl"
APP_LICENSE = "MIT"


# =============================================================================
# Timing Constants (seconds unless otherwise noted)
# =============================================================================

class Timeouts:
    """Timeout values for various operations."""
    MQTT_KEEPALIVE = 30  # seconds
    MQTT_RECONNECT_DELAY = 5  # seconds, fixed (no backoff)
    MQTT_DISCOVERY_IDLE = 2.0  # seconds of broker silence that ends discovery
    MQTT_SYNC_INTERVAL = 60  # seconds between reconcile ticks
    WORKER_JOIN = 5.0  # seconds to wait for a background thread on shutdown


# =============================================================================
# Pagination
# =============================================================================

class Pagination:
    """Limits for the global care feed."""
    CARE_FEED_DEFAULT_LIMIT = 20
    CARE_FEED_MAX_LIMIT = 100
