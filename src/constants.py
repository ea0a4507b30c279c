"""
Application Constants

This module contains constant values used throughout the application,
helping to reduce code duplication and improve maintainability.
"""

import os

# Application metadata
APP_NAME = os.environ.get("APP_NAME", "Chat Caller Identity API")

# Synthetic identity used for callers authenticated by the shared service token
SERVICE_CALLER_ID = "api-user"
SERVICE_CALLER_USERNAME = "api"
SERVICE_CALLER_DISPLAY_NAME = "API User"
