"""Quality gates — threshold evaluation and per-item lint rules."""

from todox.gate.evaluator import GateRules, evaluate
from todox.gate.lint import LINT_RULES, run_lint

__all__ = ["GateRules", "LINT_RULES", "evaluate", "run_lint"]
