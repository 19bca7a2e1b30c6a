"""Core components - configuration, endpoints, HTTP client and authentication."""

from restcli.core.api_client import ApiClient, FormattedResponse, OutputMode
from restcli.core.auth import AuthenticationService
from restcli.core.config import Settings, load_settings
from restcli.core.endpoints import EndpointRegistry, default_registry

__all__ = [
    "ApiClient",
    "AuthenticationService",
    "EndpointRegistry",
    "FormattedResponse",
    "OutputMode",
    "Settings",
    "default_registry",
    "load_settings",
]
