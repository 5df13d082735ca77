"""
Configuration Management.

Configuration sources (in order of precedence):
1. Environment variables
2. .env file
3. Default values

Secrets (session secret, upload token) are loaded from environment
variables and never committed to source control.

Example:
    from manager_portal.config import get_settings

    settings = get_settings()
    endpoint = settings.graphql_api_url
"""

from manager_portal.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
