"""
Streamlit Calculator (keypad engine)

Features:
- Keypad calculator: digits, + - * / %, sign toggle, = and clear keys.
- Scientific keys: sqrt, x², 1/x, sin, cos, tan, asin, acos, atan (degrees), xʸ.
- Memory keys: MC, MR, M+, M-.
- Keys field: type a sequence like 12+3*4= and it is fed key by key.
- Safe evaluation with a tokenizer and parser (no eval()).
- Calculation history stored in st.session_state.

Run:
    pip install -e .
    streamlit run app.py
"""

import streamlit as st

from keycalc.config import get_settings
from keycalc.engine import CalculatorEngine
from keycalc.logging_config import setup_logging

settings = get_settings()
st.set_page_config(page_title=settings.page_title, layout="centered")


@st.cache_resource
def _init_logging(level: str, log_file):
    return setup_logging(level, log_file)


_init_logging(settings.log_level, settings.log_file)

# ---------- SESSION STATE ----------
if "engine" not in st.session_state:
    st.session_state.engine = CalculatorEngine(
        error_marker=settings.error_marker,
        history_size=settings.history_size,
    )
engine: CalculatorEngine = st.session_state.engine


def feed_keys():
    """Send each typed character to the engine, then empty the field."""
    for key in st.session_state.get("keys", ""):
        st.session_state.engine.keydown(key)
    st.session_state.keys = ""


# ---------- STREAMLIT UI ----------
st.title("🧮 Keypad Calculator")

# Display: expression line above the current input
expression, current = engine.display()
st.caption(expression or " ")
st.code(current, language=None)

status = []
if engine.memory != 0:
    status.append("M")
if engine.power_mode:
    status.append(f"xʸ: base {engine.base_for_power}")
if status:
    st.markdown("  ·  ".join(f"`{s}`" for s in status))

# Memory row
mem_cols = st.columns(4)
for label, name, column in [
    ("MC", "memory-clear", mem_cols[0]),
    ("MR", "memory-recall", mem_cols[1]),
    ("M+", "memory-add", mem_cols[2]),
    ("M-", "memory-subtract", mem_cols[3]),
]:
    column.button(label, key=f"act_{name}", on_click=engine.action, args=(name,))

# Scientific function buttons
func_buttons = [
    ("sin", "sin"), ("cos", "cos"), ("tan", "tan"), ("xʸ", "power"),
    ("asin", "asin"), ("acos", "acos"), ("atan", "atan"), ("√", "sqrt"),
    ("x²", "square"), ("1/x", "reciprocal"), ("CE", "clear-entry"), ("C", "clear"),
]
func_cols = st.columns(4)
for i, (label, name) in enumerate(func_buttons):
    func_cols[i % 4].button(label, key=f"act_{name}", on_click=engine.action, args=(name,))

# On-screen keypad
kp_cols = st.columns(4)
buttons = [
    "7", "8", "9", "/",
    "4", "5", "6", "*",
    "1", "2", "3", "-",
    "0", ".", "%", "+",
]
for i, value in enumerate(buttons):
    kp_cols[i % 4].button(value, key=f"btn_{value}", on_click=engine.press, args=(value,))

last_cols = st.columns(4)
last_cols[0].button("+/-", key="btn_sign", on_click=engine.press, args=("+/-",))
last_cols[1].button("⌫", key="act_backspace", on_click=engine.action, args=("backspace",))
last_cols[2].button("=", key="act_calculate", on_click=engine.action, args=("calculate",), type="primary")

st.text_input(
    "Keys",
    key="keys",
    on_change=feed_keys,
    placeholder="e.g. 12*3=",
    help="Digits, . + - * / %, and = to evaluate.",
)

# History display
st.markdown("### History")
if engine.history:
    for idx, entry in enumerate(engine.history, start=1):
        st.write(f"{idx}. `{entry.expression}`  =  **{entry.result}**")
    st.button("Clear History", key="clear_history", on_click=engine.clear_history)
else:
    st.info("No calculations yet. Use the keypad and press =.")

st.markdown("---")
st.caption("Angles are in degrees. Evaluation uses a safe parser: it does NOT use Python's eval().")
