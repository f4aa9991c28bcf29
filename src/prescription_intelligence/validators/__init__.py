# ============================================================================
# src/prescription_intelligence/validators/__init__.py
# ============================================================================
"""
Validators Package

Checks run on extracted prescriptions:
- Drug interaction matching against the reference table
- Medication record and prescription date sanity checks
"""

from .interaction_checker import InteractionChecker
from .medication_validator import (
    IssueLevel,
    ValidationIssue,
    MedicationValidator,
)

__all__ = [
    # Interactions
    'InteractionChecker',

    # Record validation
    'IssueLevel',
    'ValidationIssue',
    'MedicationValidator',
]
