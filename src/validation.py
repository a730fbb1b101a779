"""
Field contract validation - JSON Schema checks of declared state.

Each resource kind derives a Draft 7 schema from its field declarations.
Empty optional fields are not validated: they are the "no value" sentinel,
not a value.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from jsonschema import Draft7Validator

from resources.base import ResourceKind

logger = logging.getLogger(__name__)


def validate_contract_schema(schema: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate that a field contract produces a valid JSON Schema.

    Args:
        schema: The schema to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        Draft7Validator.check_schema(schema)
        return True, None
    except Exception as e:
        return False, f"Invalid schema: {str(e)}"


def validate_declared_state(
    kind: ResourceKind, values: Dict[str, Any]
) -> Tuple[bool, Optional[str]]:
    """
    Validate declared state against the field contract of its kind.

    Args:
        kind: The resource kind whose contract applies
        values: The declared field values

    Returns:
        Tuple of (is_valid, error_message)
    """
    instance = {}
    for f in kind.fields:
        value = values.get(f.name)
        if f.required:
            if value is not None:
                instance[f.name] = value
        elif not f.is_zero(value):
            instance[f.name] = value

    try:
        validator = Draft7Validator(
            kind.schema(), format_checker=Draft7Validator.FORMAT_CHECKER
        )
        errors = list(validator.iter_errors(instance))

        if not errors:
            return True, None

        # Collect all validation errors
        error_messages = []
        for error in errors:
            path = ".".join(str(p) for p in error.absolute_path) or "(root)"
            error_messages.append(f"{path}: {error.message}")

        return False, "; ".join(error_messages)

    except Exception as e:
        logger.error(f"Unexpected error during validation: {e}")
        return False, f"Validation failed: {str(e)}"
