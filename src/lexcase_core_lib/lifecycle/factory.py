"""Process-wide transition validator.

Rule tables are loaded once, according to `EngineSettings`, and shared
read-only by every request.
"""

import logging
from typing import Optional

from lexcase_core_lib.config.settings import EngineSettings, RulesSource
from lexcase_core_lib.lifecycle.builtin_rules import builtin_rule_set
from lexcase_core_lib.lifecycle.exceptions import RuleConfigurationError
from lexcase_core_lib.lifecycle.loader import load_rule_set_file
from lexcase_core_lib.lifecycle.validator import TransitionValidator
from lexcase_core_lib.models.rules import RuleSet

logger = logging.getLogger(__name__)


def _load_local_rule_set(settings: EngineSettings) -> RuleSet:
    if settings.rules_source is RulesSource.FILE:
        if not settings.rules_file:
            raise RuleConfigurationError("LEXCASE_RULES_FILE is required for the 'file' rules source")
        return load_rule_set_file(settings.rules_file)
    return builtin_rule_set()


def build_transition_validator(settings: Optional[EngineSettings] = None) -> TransitionValidator:
    """Build a validator from the builtin or file rules source.

    Raises:
        RuleConfigurationError: If the source is 'service' (use
            `load_transition_validator`) or the rule data is invalid
    """
    settings = settings or EngineSettings()
    if settings.rules_source is RulesSource.SERVICE:
        raise RuleConfigurationError(
            "Rules source 'service' requires the async load_transition_validator()"
        )
    validator = TransitionValidator.from_rule_set(_load_local_rule_set(settings))
    logger.info(f"TransitionValidator built from {settings.rules_source.value} rules")
    return validator


async def load_transition_validator(settings: Optional[EngineSettings] = None) -> TransitionValidator:
    """Build a validator from any rules source, fetching remote rules when configured.

    Args:
        settings: Engine settings (default: from environment)

    Returns:
        TransitionValidator

    Raises:
        RuleConfigurationError: If the rule data is invalid or the service URL is missing
        httpx.HTTPError: If the rule configuration service is unreachable after retries

    Example:
        ```python
        @app.on_event("startup")
        async def startup():
            app.state.validator = await load_transition_validator()
        ```
    """
    settings = settings or EngineSettings()
    if settings.rules_source is not RulesSource.SERVICE:
        return build_transition_validator(settings)

    if not settings.rules_service_url:
        raise RuleConfigurationError(
            "LEXCASE_RULES_SERVICE_URL is required for the 'service' rules source"
        )

    # Clients depend on the lifecycle package, import them last
    from lexcase_core_lib.clients.rule_config_client import RuleConfigClient

    client = RuleConfigClient(
        base_url=settings.rules_service_url,
        timeout=settings.rules_service_timeout,
    )
    rule_set = await client.fetch_rule_set(settings.rule_set_name)
    validator = TransitionValidator.from_rule_set(rule_set)
    logger.info(f"TransitionValidator built from rule set '{settings.rule_set_name}'")
    return validator


# Singleton instance for global access
_validator_instance: Optional[TransitionValidator] = None


def get_transition_validator() -> TransitionValidator:
    """Get or create the global TransitionValidator instance.

    Returns:
        Global TransitionValidator singleton

    Example:
        ```python
        from lexcase_core_lib.lifecycle import get_transition_validator

        validator = get_transition_validator()
        result = validator.validate(state, Phase.FORMAL_PROCEEDINGS, Role.ATTORNEY)
        ```
    """
    global _validator_instance

    if _validator_instance is None:
        _validator_instance = build_transition_validator()

    return _validator_instance


def reset_transition_validator():
    """Reset the global TransitionValidator instance.

    Used for testing or reloading rules.
    """
    global _validator_instance
    _validator_instance = None
    logger.warning("TransitionValidator instance reset")
