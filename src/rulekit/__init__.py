"""rulekit: validate, copy, and install editor rule documents."""

__version__ = "1.0.0"
