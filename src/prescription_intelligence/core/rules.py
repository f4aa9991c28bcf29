# ============================================================================
# src/prescription_intelligence/core/rules.py
# ============================================================================
"""
Ordered Regex Rule Engine

Field extraction is a sequence of "try this pattern, then that one"
decisions. Each decision point is a RuleSet: an ordered tuple of
PatternRules whose position is their precedence. The first rule whose
pattern matches and whose handler accepts the match wins.

Usage:
    rules = RuleSet([
        PatternRule("cada_n_horas", r"cada\\s+\\d+\\s*horas?"),
        PatternRule("bid", r"\\bbid\\b", handler=lambda m: "2 veces al día"),
    ])
    hit = rules.first_match("Tomar cada 8 horas")
    hit.value  # "cada 8 horas"
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Pattern, Union
import logging
import re

logger = logging.getLogger(__name__)

Handler = Callable[["re.Match[str]"], Optional[Any]]


def whole_match(match: "re.Match[str]") -> str:
    """Default handler: the full matched text."""
    return match.group(0)


def first_group(match: "re.Match[str]") -> Optional[str]:
    """Handler returning the first capture group, stripped; None if blank."""
    value = (match.group(1) or "").strip()
    return value or None


@dataclass(frozen=True)
class PatternRule:
    name: str
    pattern: Union[str, Pattern[str]]
    handler: Handler = whole_match
    flags: int = re.IGNORECASE
    compiled: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        compiled = (
            self.pattern
            if isinstance(self.pattern, re.Pattern)
            else re.compile(self.pattern, self.flags)
        )
        object.__setattr__(self, "compiled", compiled)

    def apply(self, text: str) -> Optional["RuleMatch"]:
        match = self.compiled.search(text)
        if match is None:
            return None
        value = self.handler(match)
        if value is None:
            return None
        return RuleMatch(rule_name=self.name, value=value, match=match)


@dataclass(frozen=True)
class RuleMatch:
    rule_name: str
    value: Any
    match: "re.Match[str]"

    @property
    def span_text(self) -> str:
        return self.match.group(0)


class RuleSet:
    """Ordered collection of PatternRules; order is precedence."""

    def __init__(self, rules: Iterable[PatternRule]):
        self.rules = tuple(rules)

    def first_match(self, text: str) -> Optional[RuleMatch]:
        for rule in self.rules:
            hit = rule.apply(text)
            if hit is not None:
                logger.debug(f"Rule '{rule.name}' matched: {hit.span_text!r}")
                return hit
        return None

    def matches(self, text: str) -> bool:
        return self.first_match(text) is not None

    def names(self) -> List[str]:
        return [rule.name for rule in self.rules]

    def __len__(self) -> int:
        return len(self.rules)
