"""Classification engine: reservations, rule table, matcher loop, cleanup."""

from pincel.engine.classifier import Classifier, classify
from pincel.engine.cleanup import cleanup
from pincel.engine.matcher import run
from pincel.engine.reservation import ReservationTracker
from pincel.engine.rules import Rule, RuleTable, build_rule_table, make_rule

__all__ = [
    "Classifier",
    "ReservationTracker",
    "Rule",
    "RuleTable",
    "build_rule_table",
    "classify",
    "cleanup",
    "make_rule",
    "run",
]
