"""Engine settings for rule-table sourcing.

Resolves where the lifecycle engine loads its rule tables from:
- Builtin: Rule data shipped with the library
- File: JSON rule set on disk
- Service: Rule configuration service over HTTP
"""

import logging
import os
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class RulesSource(Enum):
    """Rule table sources."""

    BUILTIN = "builtin"  # Shipped rule data
    FILE = "file"  # JSON rule set file
    SERVICE = "service"  # Rule configuration service


class EngineSettings:
    """Settings for building the transition validator.

    Explicit arguments override environment variables.

    Environment Variables:
        LEXCASE_RULES_SOURCE: "builtin" (default), "file", or "service"
        LEXCASE_RULES_FILE: JSON rule set path (file source)
        LEXCASE_RULES_SERVICE_URL: Rule configuration service base URL (service source)
        LEXCASE_RULES_SERVICE_TIMEOUT: Request timeout in seconds (default: 30.0)
        LEXCASE_RULE_SET_NAME: Rule set to fetch from the service (default: "default")

    Example:
        ```python
        settings = EngineSettings()
        if settings.rules_source is RulesSource.FILE:
            rule_set = load_rule_set_file(settings.rules_file)
        ```
    """

    DEFAULT_TIMEOUT = 30.0
    DEFAULT_RULE_SET_NAME = "default"

    def __init__(
        self,
        rules_source: Optional[str] = None,
        rules_file: Optional[str] = None,
        rules_service_url: Optional[str] = None,
        rules_service_timeout: Optional[float] = None,
        rule_set_name: Optional[str] = None,
    ):
        """Initialize settings.

        Args:
            rules_source: Rule source (overrides LEXCASE_RULES_SOURCE)
            rules_file: Rule set path (overrides LEXCASE_RULES_FILE)
            rules_service_url: Service URL (overrides LEXCASE_RULES_SERVICE_URL)
            rules_service_timeout: Timeout seconds (overrides LEXCASE_RULES_SERVICE_TIMEOUT)
            rule_set_name: Rule set name (overrides LEXCASE_RULE_SET_NAME)
        """
        source_str = rules_source or os.getenv("LEXCASE_RULES_SOURCE", "builtin")
        try:
            self.rules_source = RulesSource(source_str.lower())
        except ValueError:
            logger.warning(
                f"Invalid LEXCASE_RULES_SOURCE '{source_str}', defaulting to 'builtin'"
            )
            self.rules_source = RulesSource.BUILTIN

        self.rules_file = rules_file or os.getenv("LEXCASE_RULES_FILE")
        self.rules_service_url = rules_service_url or os.getenv("LEXCASE_RULES_SERVICE_URL")
        self.rule_set_name = (
            rule_set_name or os.getenv("LEXCASE_RULE_SET_NAME") or self.DEFAULT_RULE_SET_NAME
        )

        if rules_service_timeout is not None:
            self.rules_service_timeout = float(rules_service_timeout)
        else:
            env_timeout = os.getenv("LEXCASE_RULES_SERVICE_TIMEOUT")
            self.rules_service_timeout = self.DEFAULT_TIMEOUT
            if env_timeout:
                try:
                    self.rules_service_timeout = float(env_timeout)
                except ValueError:
                    logger.warning(f"Invalid LEXCASE_RULES_SERVICE_TIMEOUT: {env_timeout}")

        if self.rules_source is RulesSource.FILE and not self.rules_file:
            logger.warning("Rules source 'file' selected but LEXCASE_RULES_FILE is not set")
        if self.rules_source is RulesSource.SERVICE and not self.rules_service_url:
            logger.warning("Rules source 'service' selected but LEXCASE_RULES_SERVICE_URL is not set")

        logger.info(
            f"EngineSettings initialized: rules_source={self.rules_source.value}, "
            f"rule_set={self.rule_set_name}"
        )
