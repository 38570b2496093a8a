# ExprEngine.py
"""""
Expression engine: evaluates arithmetic expressions by rewriting their text.

Pipeline
--------
1) Brace resolver: every innermost '( ... )' block is evaluated and replaced
   by its result; repeated until no braces change anymore.
2) Simple expression: the brace-free rest is validated, then collapsed one
   operation at a time, operator by operator in the order of
   Grammar.Operations (/, *, +, -, %).
3) Result: the remaining literal is rounded (half-to-even) to the scale.

E.g.
4 + 9                       -> 13
5 + 3 * 2                   -> 11  (multiplication first)
(5 + 3) * 2                 -> 16  (braces first)
(4 + (2 * 8)) / 2           -> 10  (most inner braces first)
10 - 5 + 3                  -> 2   (all additions before any subtraction)
"""""

import logging
import decimal
from decimal import Decimal, localcontext
import fractions

from . import Grammar as G
from . import error as E
from . import config_manager as config_manager

log = logging.getLogger(__name__)

DEFAULT_SCALE = 2

# Extra fractional digits kept by every division
DIVISION_GUARD_DIGITS = 4

# Private context for add / subtract / multiply / remainder: wide enough that
# no intermediate result is rounded. The global context is left alone.
EXACT_CONTEXT = decimal.Context(
    prec=decimal.MAX_PREC,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    rounding=decimal.ROUND_HALF_EVEN,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero],
)


# -----------------------------
# Decimal helpers
# -----------------------------

def round_half_even(value, scale):
    """Return value rounded to `scale` fractional digits, ties to even.

    `value` may be a Decimal or a Fraction; the rounding itself is exact
    (Python's round() on a Fraction already rounds half to even).
    """
    exact = fractions.Fraction(value)
    units = round(exact * fractions.Fraction(10) ** scale)
    sign = 1 if units < 0 else 0
    return Decimal((sign, tuple(int(digit) for digit in str(abs(units))), -scale))


def to_plain_string(value):
    """Fixed-point text of a Decimal, never scientific notation."""
    return format(value, "f")


def apply_operation(operand1, operation, operand2, scale):
    """Apply one operation symbol to two Decimals."""
    with localcontext(EXACT_CONTEXT):
        if operation == '+':
            return operand1 + operand2
        elif operation == '-':
            return operand1 - operand2
        elif operation == '*':
            return operand1 * operand2
        elif operation == '/':
            if operand2 == 0:
                raise E.DivisionError("Division by zero")
            # use a scale of n + 4, where n is the scale requested for the result
            return round_half_even(fractions.Fraction(operand1) / fractions.Fraction(operand2),
                                   scale + DIVISION_GUARD_DIGITS)
        elif operation == '%':
            if operand2 == 0:
                raise E.DivisionError("Remainder by zero")
            # Decimal '%' keeps the sign of the dividend, like a truncating remainder
            return operand1 % operand2
        else:
            raise E.CalculationError(f"Unknown operator: {operation}", code="3004")


# -----------------------------
# Evaluator
# -----------------------------

class ExprEval:
    """Evaluates one expression; the expression itself is never modified."""

    def __init__(self, expression, scale=DEFAULT_SCALE):
        self.initial_expression = expression
        self.scale = scale

    def set_scale(self, scale):
        """Set the required scale for the result and for divisions."""
        self.scale = scale

    def evaluate(self):
        """Evaluate the expression and return the rounded Decimal result."""
        return self.evaluate_with_rounding()[0]

    def evaluate_with_rounding(self):
        """Evaluate the expression.

        Returns:
            (rounded_value, rounding_flag), see cleanup()
        """
        try:
            result_string = self.process_complex_expr(self.initial_expression)
            return self.cleanup(result_string)
        except E.MathError as e:
            e.equation = self.initial_expression
            log.debug("Evaluation of [%s] failed: %s", self.initial_expression, e.message)
            raise

    def cleanup(self, result_string):
        """Convert the reduced text into the final value.

        Returns:
            (rounded_value, rounding_flag)
        where rounding_flag tells whether rounding changed the value.
        """
        if not G.is_numeric_literal(result_string):
            raise E.ResultFormatError(
                f"Result [{result_string}] cannot be converted to number",
                result=result_string)
        unrounded = Decimal(result_string)
        result = round_half_even(unrounded, self.scale)
        return result, result != unrounded

    def process_complex_expr(self, expression):
        """Process an expression with braces.

        E.g.
        9 + (3 + (5 + 4)) + (2 + 3) will evaluate to 26
        """
        return self.process_simple_expr(self.resolve_braces(expression))

    def resolve_braces(self, expression):
        """Repeat brace passes until one of them changes nothing."""
        processed_expr = expression
        passes = 0
        while True:
            current_expr = processed_expr
            processed_expr = self.process_complex_expr_part(processed_expr)
            if processed_expr == current_expr:
                break
            passes += 1
            log.debug("Brace pass %d: [%s] -> [%s]", passes, current_expr, processed_expr)
        return processed_expr

    def process_complex_expr_part(self, expression):
        """Process the most inner blocks enclosed in braces, one pass only.

        E.g.
        9 + (3 + (5 + 4)) + (2 + 3) will evaluate to 9 + (3 + 9) + 5
        """
        return G.INNER_BRACES_PATTERN.sub(
            lambda match: self.process_simple_expr(match.group()), expression)

    def process_simple_expr(self, expression):
        """Process an expression without braces (besides one enclosing pair).

        E.g.
        4 + 9 will evaluate to 13
        5 + 3 * 2 will evaluate to 11
        """
        self.validate_simple_expr(expression)

        current_expr = expression
        for operation in G.Operations:
            while True:
                processed_expr = self.attempt_operation(current_expr, operation)
                if processed_expr == current_expr:
                    break
                current_expr = processed_expr

        return current_expr

    def validate_simple_expr(self, expression):
        """Raise E.SyntaxError when two numbers lack a valid operator between them.

        E.g.
        3 + 5 6 + 3   -> invalid
        3 + 5 -6 + 3  -> invalid
        3 + 5 - 6 + 3 -> valid
        3 % 3, 3& 3   -> invalid
        """
        for pattern in (G.ADJACENT_NUMBERS_PATTERN, G.INVALID_SEPARATOR_PATTERN,
                        G.SPACED_PERCENT_PATTERN):
            match = pattern.search(expression)
            if match:
                raise E.SyntaxError(
                    f"Block [{match.group()}] in expression [{expression}] invalid",
                    block=match.group(), expression=expression)

    def attempt_operation(self, expression, operation):
        """Collapse the leftmost occurrence of one operation.

        E.g.
        If the attempted operation is multiplication
        3 + 5 * 6 / 3 will evaluate to 3 + 30 / 3
        """
        if G.isOp(operation) == -1:
            raise E.CalculationError(f"Unknown operator: {operation}", code="3004")

        match = G.OPERATION_PATTERNS[operation].search(expression)
        if match:
            operand1 = Decimal(match.group(1))
            operand2 = Decimal(match.group(2))
            result = apply_operation(operand1, operation, operand2, self.scale)
            log.debug("%s -> %s", match.group(), to_plain_string(result))
            expression = expression[:match.start()] + to_plain_string(result) + expression[match.end():]

        return self.trim_and_remove_braces(expression)

    @staticmethod
    def trim_and_remove_braces(expression):
        """Trim, then drop one pair of enclosing braces."""
        result = expression.strip()
        if result.startswith(G.BRACE_OPEN) and result.endswith(G.BRACE_CLOSE):
            result = result[1:-1]
        return result


# -----------------------------
# Public entry point
# -----------------------------

def calculate(problem, scale=None):
    """Main API: evaluate → render string ("= 11.00" or "≈ 0.33")."""
    try:
        if scale is None:
            scale = config_manager.load_scale()
        evaluator = ExprEval(problem, scale)
        result, rounding = evaluator.evaluate_with_rounding()

        approx_sign = "\u2248"  # "≈"
        result_text = to_plain_string(result)
        if rounding:
            return f"{approx_sign} " + result_text
        return "= " + result_text

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    # Convert unexpected Python exceptions to our unified error type
    except (ValueError, ArithmeticError, TypeError) as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem) from e
