"""Validator: runs checks over rule documents."""

from rulekit.validator.engine import ValidationError, validate

__all__ = ["ValidationError", "validate"]
