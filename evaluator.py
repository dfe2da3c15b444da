"""
Expression Evaluator for TokenCalc
Parses and evaluates arithmetic expressions without eval()
"""
import math
import re
import config


class EvaluationError(Exception):
    pass


_NUMBER_RE = re.compile(r'(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def normalize_expression(expression):
    """Replace display operators with evaluator operators"""
    for symbol, replacement in config.OPERATOR_SYMBOLS.items():
        expression = expression.replace(symbol, replacement)
    return expression


def _tokenize(expression):
    tokens = []
    i, n = 0, len(expression)
    while i < n:
        ch = expression[i]
        if ch.isspace():
            i += 1
            continue
        if expression.startswith('**', i):
            tokens.append('**')
            i += 2
            continue
        if ch in '+-*/()':
            tokens.append(ch)
            i += 1
            continue
        match = _NUMBER_RE.match(expression, i)
        if match:
            tokens.append(float(match.group(0)))
            i = match.end()
            continue
        raise EvaluationError(f"Unexpected character {ch!r}")
    return tokens


class _Parser:
    """Recursive-descent parser over the token list.

    Precedence follows Python: ``**`` is right-associative and binds
    tighter than unary minus, so ``-2**2`` is ``-4``.
    """

    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0

    def peek(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self):
        token = self.peek()
        self.pos += 1
        return token

    def parse(self):
        if not self.tokens:
            raise EvaluationError("Empty expression")
        value = self.parse_expr()
        if self.peek() is not None:
            raise EvaluationError(f"Unexpected token {self.peek()!r}")
        return value

    def parse_expr(self):
        left = self.parse_term()
        while self.peek() in ('+', '-'):
            op = self.take()
            right = self.parse_term()
            left = left + right if op == '+' else left - right
        return left

    def parse_term(self):
        left = self.parse_unary()
        while self.peek() in ('*', '/'):
            op = self.take()
            right = self.parse_unary()
            if op == '*':
                left = left * right
            else:
                if right == 0:
                    raise EvaluationError("Division by zero")
                left = left / right
        return left

    def parse_unary(self):
        if self.peek() in ('+', '-'):
            op = self.take()
            value = self.parse_unary()
            return value if op == '+' else -value
        return self.parse_power()

    def parse_power(self):
        base = self.parse_atom()
        if self.peek() == '**':
            self.take()
            exponent = self.parse_unary()
            try:
                result = base ** exponent
            except ZeroDivisionError:
                raise EvaluationError("Division by zero") from None
            except OverflowError:
                raise EvaluationError("Overflow") from None
            if isinstance(result, complex):
                raise EvaluationError("Complex result")
            return result
        return base

    def parse_atom(self):
        token = self.take()
        if isinstance(token, float):
            return token
        if token == '(':
            value = self.parse_expr()
            if self.take() != ')':
                raise EvaluationError("Unbalanced parentheses")
            return value
        if token is None:
            raise EvaluationError("Missing operand")
        raise EvaluationError(f"Unexpected token {token!r}")


def evaluate(expression):
    """Evaluate a normalized arithmetic expression and return a float.

    Supports ``+ - * / **``, parentheses and unary signs. Raises
    EvaluationError for anything malformed or for a non-finite result.
    """
    result = _Parser(_tokenize(expression)).parse()
    if not math.isfinite(result):
        raise EvaluationError("Result is not a finite number")
    return result


def round_result(value, digits=config.ROUND_DIGITS):
    """Round away binary floating-point noise"""
    rounded = round(value, digits)
    # avoid displaying "-0"
    return rounded + 0.0 if rounded == 0 else rounded


def format_number(value):
    """Format a number the way the display shows it"""
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def evaluate_display(expression):
    """Evaluate a display expression (×, ÷, ^) into a formatted result string"""
    value = evaluate(normalize_expression(expression))
    return format_number(round_result(value))
