"""Rule set loading.

Rule sets arrive as plain mappings (JSON file, config service payload) and are
validated into frozen `RuleSet` models here, once, at startup. Malformed data
raises `RuleConfigurationError`; it is never deferred to request time.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Union

from pydantic import ValidationError

from lexcase_core_lib.lifecycle.exceptions import RuleConfigurationError
from lexcase_core_lib.models.rules import RuleSet

logger = logging.getLogger(__name__)


def load_rule_set(data: Mapping[str, Any]) -> RuleSet:
    """Validate a rule set mapping.

    Args:
        data: Mapping with `transitions` and `case_type_rules` lists, as
            produced by `RuleSet.model_dump(mode="json")`

    Returns:
        Frozen RuleSet

    Raises:
        RuleConfigurationError: If any rule is malformed (unknown operator,
            unknown phase/role/case type, invalid edge, ...)
    """
    try:
        rule_set = RuleSet.model_validate(data)
    except ValidationError as e:
        raise RuleConfigurationError(f"Invalid rule set: {e}") from e

    logger.info(
        f"Loaded rule set: transitions={len(rule_set.transitions)}, "
        f"case_types={len(rule_set.case_type_rules)}"
    )
    return rule_set


def load_rule_set_file(path: Union[str, Path]) -> RuleSet:
    """Load and validate a JSON rule set file.

    Raises:
        RuleConfigurationError: If the file is missing, not JSON, or invalid
    """
    path = Path(path)
    logger.info(f"Loading rule set from: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise RuleConfigurationError(f"Cannot read rule set file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise RuleConfigurationError(f"Rule set file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise RuleConfigurationError(f"Rule set file {path} must contain a JSON object")
    return load_rule_set(data)


def dump_rule_set(rule_set: RuleSet) -> dict:
    """JSON-compatible form of a rule set (inverse of `load_rule_set`)"""
    return rule_set.model_dump(mode="json")
