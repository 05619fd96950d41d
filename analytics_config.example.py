"""
Analytics Configuration Example

Copy this file to 'analytics_config.py' and fill in your values.
"""

# Measurement Protocol property id used by your app at initialize()
TRACKING_ID = 'UA-XXXXXXXX-1'

# Leave app name / identifier / company out of every payload
DISABLE_APPLICATION_TRACKING = False

# Request timeout in seconds (None = transport default)
REQUEST_TIMEOUT = None

# Validate TLS against the certifi CA bundle (recommended for PyInstaller builds)
USE_CERTIFI = True

# Debug logging to console and file
TELEMETRY_DEBUG = False
DEBUG_LOG_FILE = '~/Desktop/publisher_analytics_debug.log'
