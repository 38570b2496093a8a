# error.py
"""Error types shared by the expression engine, the config manager and the runner."""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

    def __str__(self):
        if self.equation is not None:
            return f"{self.message} (expression [{self.equation}])"
        return self.message


class SyntaxError(MathError):
    """Two numbers in a flat fragment without a supported operator between them."""
    def __init__(self, message, code="3011", equation=None, block=None, expression=None):
        super().__init__(message, code=code, equation=equation)
        self.block = block
        self.expression = expression


class DivisionError(MathError):
    def __init__(self, message, code="3003", equation=None):
        super().__init__(message, code=code, equation=equation)


class ResultFormatError(MathError):
    """The fully reduced text is not a single numeric literal."""
    def __init__(self, message, code="3031", equation=None, result=None):
        super().__init__(message, code=code, equation=equation)
        self.result = result


class CalculationError(MathError):
    pass


class ConfigError(MathError):
    pass


Error_Dictionary = {

    "3" : "Calculator Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

# Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "3003" : "Division by Zero",
    "3004" : "Invalid Operator: ", # + operator
    "3011" : "Invalid block in expression: ", # + block
    "3031" : "Result cannot be converted to a number: ", # + reduced text

    "5001" : "Invalid setting value: ", # + setting

    "9999" : "Unexpected Error: " #+error
}


def describe(error):
    """Render an error the way the runner prints it: code, category text, detail."""
    code = getattr(error, "code", "9999")
    category = Error_Dictionary.get(code[:1], "Unknown error")
    text = ERROR_MESSAGES.get(code, category).rstrip(": ")
    return f"Error {code}: {text} - {error}"
