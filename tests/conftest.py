import pytest

from keycalc.engine import CalculatorEngine


@pytest.fixture
def engine():
    """A fresh engine with default settings."""
    return CalculatorEngine()


def press_keys(engine, *keys):
    """Feed keypad values and action names: press_keys(e, "1", "2", "+", "3", "=")."""
    for key in keys:
        if key == "=":
            engine.evaluate()
        elif len(key) > 1 and key != "+/-":
            engine.action(key)
        else:
            engine.press(key)
    return engine
