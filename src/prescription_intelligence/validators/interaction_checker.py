# ============================================================================
# src/prescription_intelligence/validators/interaction_checker.py
# ============================================================================
"""
Drug Interaction Checker

Matches a medication list against the static interaction table.

An entry fires when at least two DISTINCT medication names each contain
one of its drug tokens (case-insensitive substring match). The first two
matching names, in extraction order, become the reported pair. Results
are ordered most severe first; ties keep table order.
"""

from typing import Iterable, List, Optional, Sequence
import logging

from ..constants.interactions import INTERACTION_TABLE
from ..core.models import ExtractedMedication, Interaction, InteractionTableEntry


logger = logging.getLogger(__name__)


def _distinct(names: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for name in names:
        if name and name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered


class InteractionChecker:
    """
    Checks medication names against a read-only interaction table.
    """

    def __init__(self, table: Optional[Sequence[InteractionTableEntry]] = None):
        self.table = tuple(INTERACTION_TABLE if table is None else table)

    def check(self, medications: Sequence[ExtractedMedication]) -> List[Interaction]:
        """
        Interactions among extracted medications.

        Args:
            medications: Extraction result medications, in order

        Returns:
            Interactions sorted by severity, most severe first
        """
        return self.check_names(med.name for med in medications)

    def check_names(self, names: Iterable[str]) -> List[Interaction]:
        candidates = _distinct(names)
        if len(candidates) < 2:
            return []

        found = []
        for entry in self.table:
            matched = self._matching_names(entry, candidates)
            if len(matched) < 2:
                continue
            interaction = Interaction(
                drug1=matched[0],
                drug2=matched[1],
                severity=entry.severity,
                description=entry.description,
                recommendation=entry.recommendation,
            )
            logger.debug(
                f"Interaction {interaction.drug1} + {interaction.drug2}: "
                f"{interaction.severity.label}"
            )
            found.append(interaction)

        # sorted() is stable, so equal severities stay in table order
        return sorted(found, key=lambda i: i.severity, reverse=True)

    def check_with_existing(
        self,
        new_medications: Sequence[ExtractedMedication],
        existing_names: Iterable[str]
    ) -> List[Interaction]:
        """
        Interactions across the combined list once newly scanned
        medications join the current ones. New names come first.
        """
        return self.check_names(
            [med.name for med in new_medications] + list(existing_names)
        )

    @staticmethod
    def _matching_names(entry: InteractionTableEntry, names: Sequence[str]) -> List[str]:
        tokens = entry.tokens
        return [
            name for name in names
            if any(token in name.lower() for token in tokens)
        ]
