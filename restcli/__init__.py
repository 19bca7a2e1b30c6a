"""
restcli - a command-line client for a single preconfigured REST API.

Named endpoints map to URL path templates, so a call is just:
- pick an endpoint name
- fill in its path parameters
- optionally authenticate with the configured login
"""

__version__ = "0.1.0"
__app_name__ = "restcli"
