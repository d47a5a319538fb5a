"""
Travel Rule Compliance Calculator

Evaluates which originator/beneficiary data fields two VASPs must exchange for
a cross-border transfer and whether their jurisdictions' requirements align.
"""

__version__ = "0.1.0"

from .core.calculator import ComplianceCalculator, calculate_compliance
from .core.errors import ConfigurationLookupError, ConfigurationSchemaError, TravelRuleError
from .core.models import ComplianceResult, ComplianceStatus, TransactionDescription

__all__ = [
    "ComplianceCalculator",
    "ComplianceResult",
    "ComplianceStatus",
    "ConfigurationLookupError",
    "ConfigurationSchemaError",
    "TransactionDescription",
    "TravelRuleError",
    "calculate_compliance",
]
