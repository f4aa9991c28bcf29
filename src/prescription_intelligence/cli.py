# ============================================================================
# src/prescription_intelligence/cli.py
# ============================================================================
"""
Prescription scan command line

Reads OCR text from a file (or stdin), runs the extraction chain and
prints the scan report as JSON, with a suggested dose schedule and
validation issues for every medication.

Usage:
    prescription-intel receta.txt
    cat receta.txt | prescription-intel --no-llm
    prescription-intel receta.txt --log-level DEBUG --json-logs
"""

from pathlib import Path
from typing import Dict, Any, List, Optional
import argparse
import asyncio
import json
import logging
import sys

from .core.config import get_config
from .core.models import ScanReport
from .core.orchestrator import ExtractionOrchestrator
from .processors.prescription.agents.dosage_parser import canonical_frequency, generate_times
from .utils.exceptions import PrescriptionIntelligenceError
from .utils.logging import setup_logging
from .validators.medication_validator import MedicationValidator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prescription-intel",
        description="Extract medications from prescription OCR text"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="OCR text file (reads stdin when omitted)"
    )
    parser.add_argument(
        "--no-llm",
        action="store_true",
        help="Skip the language model and use the heuristic parser only"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines on stderr"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    return parser


def render_report(report: ScanReport, validator: Optional[MedicationValidator] = None) -> Dict[str, Any]:
    """Scan report dict enriched with schedules and validation issues."""
    validator = validator or MedicationValidator()
    output = report.to_dict()

    medications: List[Dict[str, Any]] = []
    for med, med_dict in zip(report.result.medications, output["medications"]):
        slots = generate_times(med.frequency)
        freq = canonical_frequency(med.frequency)
        med_dict["canonical_frequency"] = freq.value if freq else None
        med_dict["schedule"] = [str(slot) for slot in slots]
        med_dict["issues"] = [issue.to_dict() for issue in validator.validate(med, slots)]
        medications.append(med_dict)
    output["medications"] = medications

    date_issue = validator.validate_prescription_date(report.result.prescription_date)
    output["prescription_date_issue"] = date_issue.to_dict() if date_issue else None
    return output


async def run(text: str, use_llm: bool = True) -> Dict[str, Any]:
    overrides = None if use_llm else {"backend": "none"}
    orchestrator = ExtractionOrchestrator.from_config(overrides)
    try:
        report = await orchestrator.scan(text)
    finally:
        await orchestrator.close()
    return render_report(report)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()

    setup_logging(
        level=args.log_level or config['log_level'],
        format_json=args.json_logs or config['log_json'],
    )

    try:
        if args.file is not None:
            text = args.file.read_text(encoding="utf-8")
        else:
            text = sys.stdin.read()
    except OSError as e:
        logger.error(f"Could not read input: {e}")
        return 2

    try:
        output = asyncio.run(run(text, use_llm=not args.no_llm))
    except PrescriptionIntelligenceError as e:
        logger.error(f"Scan failed: {e}")
        return 1

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
