"""Calculator engine: the key-driven arithmetic state machine.

The engine owns two display strings. `expression` is the committed left-hand
side ("12+3*"), `current_input` is the operand being typed. Every key event
maps to one method; each method runs to completion and refreshes the display.

The power key is a two-step interaction. Pressing it captures the current
operand as the base and switches to Mode.POWER_PENDING, where digits feed the
exponent. "=" (or any operator key) then commits base ** exponent.

Nothing here raises to the caller. Undefined results put the error marker in
`current_input`, clear `expression` and drop any pending power.
"""

import enum
import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional

from keycalc.evaluator import OPERATORS, EvalError, rewrite_percent, safe_eval, strip_trailing_operators
from keycalc.functions import FUNCTION_NAMES, FUNCTIONS, DomainError
from keycalc.numfmt import float_pow, format_number, parse_float

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
SIGN_KEY = "+/-"


class Mode(enum.Enum):
    NORMAL = "normal"
    POWER_PENDING = "power_pending"


@dataclass
class HistoryEntry:
    expression: str
    result: str


class CalculatorEngine:
    """Calculator state plus one method per input event."""

    def __init__(
        self,
        error_marker: str = "Error",
        history_size: int = 20,
        on_display: Optional[Callable[[str, str], None]] = None,
    ):
        self.error_marker = error_marker
        self.history_size = history_size
        self.on_display = on_display

        self.current_input = "0"
        self.expression = ""
        self.memory = 0.0
        self.last_result: Optional[float] = None
        self.mode = Mode.NORMAL
        self.base_for_power: Optional[str] = None
        self.history: List[HistoryEntry] = []

    # ---------- display ----------

    @property
    def power_mode(self) -> bool:
        return self.mode is Mode.POWER_PENDING

    def display(self):
        """(expression, current input) as shown; an empty input shows as "0"."""
        return self.expression, self.current_input or "0"

    def _refresh(self) -> None:
        if self.on_display is not None:
            self.on_display(*self.display())

    def _show_error(self, reason: str) -> None:
        logger.debug("Error marker shown: %s", reason)
        self.current_input = self.error_marker
        self.expression = ""
        self.mode = Mode.NORMAL
        self.base_for_power = None
        self._refresh()

    # ---------- clearing ----------

    def clear_all(self) -> None:
        """Abandon the entry, including a pending power. Memory and last result survive."""
        self.current_input = "0"
        self.expression = ""
        self.mode = Mode.NORMAL
        self.base_for_power = None
        logger.debug("Cleared all")
        self._refresh()

    def clear_entry(self) -> None:
        self.current_input = "0"
        self._refresh()

    def backspace(self) -> None:
        if len(self.current_input) > 1:
            self.current_input = self.current_input[:-1]
        else:
            self.current_input = "0"
        self._refresh()

    # ---------- operand entry ----------

    def input_digit(self, d: str) -> None:
        """Append a digit or the decimal point to the operand (or exponent)."""
        if self.current_input == self.error_marker:
            self.current_input = "0"
        if d == "." and "." in self.current_input:
            return
        if self.current_input == "0" and d != ".":
            self.current_input = d
        else:
            self.current_input += d
        logger.debug("Digit %r -> %r (%s)", d, self.current_input, self.mode.value)
        self._refresh()

    def input_sign(self) -> None:
        """Toggle a leading minus. Acts on the exponent while a power is pending."""
        if self.current_input == self.error_marker:
            self.current_input = "0"
        if self.current_input.startswith("-"):
            self.current_input = self.current_input[1:]
        elif self.current_input != "0":
            self.current_input = "-" + self.current_input
        self._refresh()

    # ---------- operators and evaluation ----------

    def input_operator(self, operator: str) -> None:
        """Commit the operand with `operator`.

        Once `expression` ends in an operator, the next operator key replaces
        it and whatever was typed in between is dropped: 12 + 3 * gives "12*".

        While a power is pending the operator key only commits the power and
        is itself discarded.
        """
        if self.power_mode:
            self._commit_power(record=False)
            return

        if self.expression and self.expression[-1] in OPERATORS:
            self.expression = self.expression[:-1] + operator
        else:
            self.expression += self.current_input + operator
        self.current_input = ""
        logger.debug("Operator %r -> expression %r", operator, self.expression)
        self._refresh()

    def evaluate(self) -> None:
        """The "=" key."""
        if self.power_mode:
            self._commit_power(record=True)
            return

        if not self.expression and not self.current_input:
            self.current_input = "0"
            self._refresh()
            return

        full = strip_trailing_operators(self.expression + self.current_input)
        try:
            result = safe_eval(rewrite_percent(full))
        except EvalError as e:
            self._show_error(f"cannot evaluate {full!r}: {e}")
            return
        if not math.isfinite(result):
            self._show_error(f"{full!r} is not finite")
            return

        self.last_result = result
        self.current_input = format_number(result)
        self.expression = ""
        logger.info("Evaluated %s = %s", full, self.current_input)
        self._record(full, self.current_input)
        self._refresh()

    def _commit_power(self, record: bool) -> None:
        if self.base_for_power is None or self.current_input == "":
            return
        base = parse_float(self.base_for_power)
        exponent = parse_float(self.current_input)
        if base is None or exponent is None:
            logger.debug("Bad power operands %r ^ %r", self.base_for_power, self.current_input)
            self.clear_all()
            return

        result = float_pow(base, exponent)
        text = f"{self.base_for_power}^{self.current_input}"
        self.current_input = format_number(result)
        self.expression = ""
        self.mode = Mode.NORMAL
        self.base_for_power = None
        logger.info("Power %s = %s", text, self.current_input)
        self._refresh()
        if record:
            self.last_result = result
            self._record(text, self.current_input)

    # ---------- function keys ----------

    def apply_function(self, name: str) -> None:
        number = parse_float(self.current_input)
        if number is None:
            return

        if name == "power":
            self.base_for_power = self.current_input
            self.mode = Mode.POWER_PENDING
            self.current_input = ""
            logger.debug("Power base %r captured", self.base_for_power)
            self._refresh()
            return

        func = FUNCTIONS.get(name)
        if func is None:
            return
        try:
            result = func(number)
        except DomainError as e:
            self._show_error(str(e))
            return
        self.current_input = format_number(result)
        self.expression = ""
        logger.debug("%s(%s) = %s", name, format_number(number), self.current_input)
        self._refresh()

    # ---------- memory ----------

    def memory_clear(self) -> None:
        self.memory = 0.0

    def memory_recall(self) -> None:
        self.current_input = format_number(self.memory)
        self._refresh()

    def memory_add(self) -> None:
        number = parse_float(self.current_input)
        if number is not None:
            self.memory += number

    def memory_subtract(self) -> None:
        number = parse_float(self.current_input)
        if number is not None:
            self.memory -= number

    # ---------- history ----------

    def _record(self, expression: str, result: str) -> None:
        self.history.insert(0, HistoryEntry(expression, result))
        del self.history[self.history_size:]

    def clear_history(self) -> None:
        self.history = []

    # ---------- event dispatch ----------

    def press(self, value: str) -> None:
        """A keypad button carrying a value: digit, ".", "+/-" or an operator."""
        if value == SIGN_KEY:
            self.input_sign()
        elif len(value) != 1:
            return
        elif value in DIGITS or value == ".":
            self.input_digit(value)
        elif value in OPERATORS:
            self.input_operator(value)

    def action(self, name: str) -> None:
        """A keypad button carrying an action name."""
        if name == "clear":
            self.clear_all()
        elif name == "clear-entry":
            self.clear_entry()
        elif name == "calculate":
            self.evaluate()
        elif name == "backspace":
            self.backspace()
        elif name in FUNCTION_NAMES:
            self.apply_function(name)
        elif name == "memory-clear":
            self.memory_clear()
        elif name == "memory-recall":
            self.memory_recall()
        elif name == "memory-add":
            self.memory_add()
        elif name == "memory-subtract":
            self.memory_subtract()

    def keydown(self, key: str) -> bool:
        """A keyboard key name. Returns False for keys the calculator ignores."""
        if len(key) == 1 and (key in DIGITS or key == "."):
            self.input_digit(key)
        elif key in ("Enter", "="):
            self.evaluate()
        elif key == "Backspace":
            self.backspace()
        elif len(key) == 1 and key in OPERATORS:
            self.input_operator(key)
        elif key == "Escape":
            self.clear_all()
        else:
            return False
        return True
