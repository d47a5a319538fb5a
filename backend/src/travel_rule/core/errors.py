"""
Custom exception classes for the travel rule calculator.

Defines specific error types for configuration failures.
"""

from typing import Any, Dict, List, Optional


class TravelRuleError(Exception):
    """Base exception for all travel rule calculator errors."""

    pass


class ConfigurationLookupError(TravelRuleError):
    """Raised when a country code has no entry in the jurisdiction table."""

    def __init__(self, code: str, side: Optional[str] = None):
        self.code = code
        self.side = side
        where = f" ({side})" if side else ""
        super().__init__(f"no jurisdiction configured for country code {code!r}{where}")


class ConfigurationSchemaError(TravelRuleError):
    """Raised when jurisdiction tables fail structural validation."""

    def __init__(self, message: str, *, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []
