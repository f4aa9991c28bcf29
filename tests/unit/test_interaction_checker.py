# ============================================================================
# FILE: tests/unit/test_interaction_checker.py
# ============================================================================
"""
Unit tests for drug interaction matching
"""

import pytest

from prescription_intelligence.constants.interactions import INTERACTION_TABLE
from prescription_intelligence.core.enums import Severity
from prescription_intelligence.core.models import InteractionTableEntry
from prescription_intelligence.validators.interaction_checker import InteractionChecker


@pytest.fixture
def checker():
    return InteractionChecker()


def test_moderate_pair(checker, make_medication):
    """Escitalopram + Mirtazapina gives exactly one moderate interaction"""
    meds = [make_medication(name="Escitalopram 10mg"), make_medication(name="Mirtazapina 15mg")]

    interactions = checker.check(meds)

    assert len(interactions) == 1
    assert interactions[0].severity == Severity.MODERATE
    assert interactions[0].drug1 == "Escitalopram 10mg"
    assert interactions[0].drug2 == "Mirtazapina 15mg"


def test_sorted_most_severe_first(checker):
    interactions = checker.check_names(["Escitalopram", "Mirtazapina", "Warfarina", "Aspirina"])

    assert [i.severity for i in interactions] == [Severity.MAJOR, Severity.MODERATE]


def test_equal_severity_keeps_table_order(checker):
    names = ["Clonazepam", "Alcohol", "Fluoxetina", "Tramadol"]
    interactions = checker.check_names(names)

    assert [i.severity for i in interactions] == [Severity.MAJOR, Severity.MAJOR]
    # fluoxetina/tramadol precedes clonazepam/alcohol in the table
    assert interactions[0].drug1 == "Fluoxetina"
    assert interactions[1].drug1 == "Clonazepam"


def test_single_name_matching_two_tokens_is_not_a_pair(checker):
    """Both tokens inside one name is still one medication"""
    assert checker.check_names(["Escitalopram/Mirtazapina"]) == []


def test_duplicate_names_are_one_medication(checker):
    assert checker.check_names(["Escitalopram", "Escitalopram"]) == []


def test_case_insensitive(checker):
    interactions = checker.check_names(["WARFARINA sódica", "aspirina"])
    assert interactions[0].severity == Severity.MAJOR


def test_no_interactions(checker):
    assert checker.check_names(["Amoxicilina", "Ibuprofeno"]) == []
    assert checker.check([]) == []


def test_first_two_matches_reported(checker):
    """Three names hitting one entry report the first two in order"""
    names = ["Aspirina 100", "Warfarina", "Aspirina 500"]
    major = [i for i in checker.check_names(names) if i.severity == Severity.MAJOR]

    assert len(major) == 1
    assert (major[0].drug1, major[0].drug2) == ("Aspirina 100", "Warfarina")


def test_check_with_existing(checker, make_medication):
    """New scans are checked against the current medication list"""
    new = [make_medication(name="Tramadol")]

    interactions = checker.check_with_existing(new, ["Fluoxetina", "Metformina"])

    assert len(interactions) == 1
    assert interactions[0].drug1 == "Tramadol"
    assert interactions[0].drug2 == "Fluoxetina"


def test_check_with_existing_covers_whole_list(checker, make_medication):
    """Pairs among existing medications are reported too"""
    new = [make_medication(name="Omeprazol")]

    interactions = checker.check_with_existing(new, ["Warfarina", "Aspirina"])

    assert len(interactions) == 1
    assert interactions[0].severity == Severity.MAJOR
    assert (interactions[0].drug1, interactions[0].drug2) == ("Warfarina", "Aspirina")


def test_custom_table():
    table = (
        InteractionTableEntry(
            drugs=("sildenafil", "nitroglicerina"),
            severity=Severity.CONTRAINDICATED,
            description="Hipotensión grave.",
            recommendation="No combinar.",
        ),
    )
    interactions = InteractionChecker(table).check_names(["Sildenafil", "Nitroglicerina"])

    assert interactions[0].severity == Severity.CONTRAINDICATED
    assert interactions[0].to_dict()["severity_label"] == "Contraindicada"


def test_table_is_immutable():
    assert isinstance(INTERACTION_TABLE, tuple)
    assert len(INTERACTION_TABLE) == 8
