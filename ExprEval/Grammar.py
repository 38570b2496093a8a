# Grammar.py
"""Lexical vocabulary of the expression engine.

Everything here is a plain regular expression (or a compiled one). The engine
never tokenizes; it matches these patterns against the current text and
rewrites the match in place.
"""

import re

# Regex flags used for every compiled pattern: '\s' is ASCII whitespace only
FLAGS = re.ASCII

# A character that can never sit between two numbers (whitespace included)
REGEX_INVALID_CHAR = r"[^+\-*/.0-9%]"

# Decimal literal, optionally negative; the decimal form is tried first
REGEX_NUMERIC_VALUE = r"(-?[0-9]+\.[0-9]+|-?[0-9]+)"

REGEX_WHITE_SPACE_OPTNL = r"\s*"
REGEX_WHITE_SPACE_MNDTRY = r"\s+"

# Innermost block surrounded by braces
REGEX_INNER_BRACES = r"\([^()]*\)"

BRACE_OPEN = "("
BRACE_CLOSE = ")"

# Supported operations, in the order they are processed.
# This is also the precedence: each one is exhausted before the next,
# so '%' comes after '+' and '-'.
Operations = ["/", "*", "+", "-", "%"]

OPERATION_REGEX = {
    "/": r"\/",
    "*": r"\*",
    "+": r"\+",
    "-": r"\-",
    "%": r"%",
}


def operation_regex(operation):
    """Return '<number> <op> <number>' for one operation symbol."""
    return (REGEX_NUMERIC_VALUE + REGEX_WHITE_SPACE_OPTNL + OPERATION_REGEX[operation]
            + REGEX_WHITE_SPACE_OPTNL + REGEX_NUMERIC_VALUE)


OPERATION_PATTERNS = {op: re.compile(operation_regex(op), FLAGS) for op in Operations}

INNER_BRACES_PATTERN = re.compile(REGEX_INNER_BRACES, FLAGS)

# "3 4", "3 + 5 -6"
ADJACENT_NUMBERS_PATTERN = re.compile(
    REGEX_NUMERIC_VALUE + REGEX_WHITE_SPACE_MNDTRY + REGEX_NUMERIC_VALUE, FLAGS)

# "3 % 4", "3& 4"
INVALID_SEPARATOR_PATTERN = re.compile(
    REGEX_NUMERIC_VALUE + REGEX_WHITE_SPACE_OPTNL + REGEX_INVALID_CHAR
    + REGEX_WHITE_SPACE_OPTNL + REGEX_NUMERIC_VALUE, FLAGS)

# "3 % 4", "3 %4": a percent sign with whitespace on either side is a
# separator, not the remainder operator, which is written "3%4"
SPACED_PERCENT_PATTERN = re.compile(
    REGEX_NUMERIC_VALUE + r"(?:\s+%\s*|\s*%\s+)" + REGEX_NUMERIC_VALUE, FLAGS)

NUMERIC_LITERAL_PATTERN = re.compile(REGEX_NUMERIC_VALUE, FLAGS)


def is_numeric_literal(text):
    """Return True if the whole text is exactly one numeric literal."""
    return NUMERIC_LITERAL_PATTERN.fullmatch(text) is not None


def isOp(symbol):
    """Return index of a supported operator or -1 if unknown."""
    try:
        return Operations.index(symbol)
    except ValueError:
        return -1
