"""Service Clients

HTTP clients for the services the lifecycle engine talks to.
"""

from .base import BaseServiceClient
from .case_service_client import CaseServiceClient
from .rule_config_client import RuleConfigClient

__all__ = [
    "BaseServiceClient",
    "CaseServiceClient",
    "RuleConfigClient",
]
