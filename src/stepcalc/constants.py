"""
Shared constants across stepcalc modules.

This module is the single source of truth for:
- Built-in operator symbols
- Stage labels for the reduction trace
- Environment variable names and service defaults
"""

# =============================================================================
# OPERATOR SYMBOLS
# =============================================================================
# The built-in table. All symbols are single characters today, but the
# tokenizer decomposes symbol runs of any length.

SYMBOL_PLUS = "+"
SYMBOL_MINUS = "-"
SYMBOL_MULTIPLY = "*"
SYMBOL_DIVIDE = "/"
SYMBOL_REMAINDER = "%"
SYMBOL_SQUARE_ROOT = "?"

# Symbols allowed to chain in front of a literal to build its sign
SELF_COMPOUNDING_SYMBOLS = {SYMBOL_PLUS, SYMBOL_MINUS}

DECIMAL_POINT = "."


# =============================================================================
# TRACE LABELS
# =============================================================================

STAGE_INIT = "INIT"


# =============================================================================
# MESSAGES
# =============================================================================

MESSAGE_EMPTY_EXPRESSION = "Expression cannot be empty"
MESSAGE_ILLEGAL_ARITHMETIC = (
    "Maybe you want to divide by 0 or try to root a negative number."
)


# =============================================================================
# SERVICE CONFIGURATION
# =============================================================================

ENV_PREFIX = "STEPCALC_"
ENV_HOST = f"{ENV_PREFIX}HOST"
ENV_PORT = f"{ENV_PREFIX}PORT"
ENV_DEBUG = f"{ENV_PREFIX}DEBUG"
ENV_LOG_LEVEL = f"{ENV_PREFIX}LOG_LEVEL"
ENV_EXPRESSION_PARAM = f"{ENV_PREFIX}EXPRESSION_PARAM"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_EXPRESSION_PARAM = "expression"

SERVICE_NAME = "stepcalc"
