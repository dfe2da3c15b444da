"""
TokenCalc Configuration Settings
"""
import os

# Application Settings
APP_NAME = "TokenCalc"
VERSION = "1.0.0"

# Token Settings
ERROR_TOKEN = "Error"
OPERATORS = ("+", "-", "×", "÷", "^")
BRACKETS = ("(", ")")

# Display symbol -> evaluator symbol
OPERATOR_SYMBOLS = {
    "÷": "/",
    "×": "*",
    "^": "**",
    "−": "-",   # unicode minus sign
}

# Results are stable to this many fractional digits
ROUND_DIGITS = 10

# Storage Settings
DB_PATH = os.environ.get(
    "TOKENCALC_DB",
    os.path.join(os.path.dirname(__file__), "tokencalc.db")
)
HISTORY_KEY = "equations"

# History Settings
MAX_HISTORY_ITEMS = 100

# Web Portal settings
WEB_HOST = '0.0.0.0'
WEB_PORT = 8888
