"""keycalc — keypad calculator engine with a Streamlit front end.

The engine turns discrete key events (digits, operators, unary functions,
memory commands) into an expression line and a current-input line, and
evaluates the final expression with a safe parser (no eval()).

Usage:
    streamlit run app.py
"""

from keycalc.engine import CalculatorEngine, HistoryEntry, Mode
from keycalc.evaluator import EvalError, safe_eval

__all__ = ["CalculatorEngine", "EvalError", "HistoryEntry", "Mode", "safe_eval"]
