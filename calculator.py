"""
Calculator Engine for TokenCalc
Folds key presses into a token sequence and evaluates it
"""
import math
import config
from evaluator import EvaluationError, evaluate_display, format_number


class UnknownKeyError(ValueError):
    pass


def is_operator(token):
    return token in config.OPERATORS


def is_bracket(token):
    return token in config.BRACKETS


def is_number(token):
    return not (token is None or is_operator(token) or is_bracket(token)
                or token == config.ERROR_TOKEN)


def is_exponent_form(token):
    return is_number(token) and ("e" in token or "E" in token)


def to_expression(tokens):
    """Join tokens for evaluation, keeping negative operands as one literal"""
    # "-3" then "^" must mean (-3)^2, not -(3^2)
    return "".join(f"({t})" if is_number(t) and t.startswith("-") else t
                   for t in tokens)


class Calculator:
    def __init__(self, history_manager):
        self.history_manager = history_manager
        self._tokens = []
        # Flag for the "clear everything" confirmation dialog
        self.show_confirmation = False

    # ------------------- Derived values -------------------

    @property
    def tokens(self):
        return list(self._tokens)

    @property
    def history(self):
        return self.history_manager.get_calculation_history()

    @property
    def display_value(self):
        """Joined tokens, or "0" if there's nothing to display"""
        return ''.join(self._tokens) if self._tokens else '0'

    @property
    def live_result(self):
        """Evaluation of the current tokens shown while typing"""
        if not self._tokens:
            return ''

        tokens = self._tokens
        # Ignore a trailing operator for the preview
        if is_operator(tokens[-1]):
            tokens = tokens[:-1]

        try:
            return evaluate_display(to_expression(tokens))
        except EvaluationError:
            return ''

    def _last(self):
        return self._tokens[-1] if self._tokens else None

    def _discard_error(self):
        if self._last() == config.ERROR_TOKEN:
            self._tokens = []

    # ------------------- Input -------------------

    def append_digit(self, digit):
        """Add a digit to the current operand"""
        self._discard_error()
        last = self._last()

        # Start a new operand after an operator or bracket
        if not is_number(last):
            self._tokens.append(digit)
        else:
            self._tokens[-1] = last + digit

    def append_dot(self):
        """Add a decimal point to the current operand"""
        self._discard_error()
        last = self._last()

        if not is_number(last):
            self._tokens.append("0.")
        elif "." not in last and not is_exponent_form(last):
            self._tokens[-1] = last + "."

    def set_operator(self, operator):
        """Add an operator, replacing a trailing one"""
        self._discard_error()
        if not self._tokens:
            self._tokens = ["0", operator]
        elif is_operator(self._last()):
            self._tokens[-1] = operator
        else:
            self._tokens.append(operator)

    def toggle_sign(self):
        """Flip the sign of the current operand"""
        self._discard_error()
        last = self._last()
        if is_number(last):
            self._tokens[-1] = last[1:] if last.startswith("-") else "-" + last

    def percentage(self):
        """Divide the current operand by 100"""
        self._discard_error()
        last = self._last()
        if is_number(last):
            try:
                value = float(last) / 100
            except ValueError:
                return
            if math.isfinite(value):
                self._tokens[-1] = format_number(value)

    def append_bracket(self, bracket):
        """Add a parenthesis; balance is only checked on evaluation"""
        self._discard_error()
        self._tokens.append(bracket)

    def delete(self):
        """Remove the last character, or the last token if it is one character"""
        self._discard_error()
        last = self._last()
        if last is None:
            return

        # An exponent-form result like "1e+16" is removed as a whole
        if is_exponent_form(last):
            self._tokens.pop()
        elif len(last) > 1:
            shortened = last[:-1]
            # "-5" -> "-" would leave a stray operator
            if shortened == "-":
                self._tokens.pop()
            else:
                self._tokens[-1] = shortened
        else:
            self._tokens.pop()

    def clear(self):
        """Clear current tokens"""
        self._tokens = []

    # ------------------- Evaluation -------------------

    def calculate(self):
        """Evaluate the current tokens and record the result in history"""
        if not self._tokens:
            return

        # Remove trailing operators
        while self._tokens and is_operator(self._tokens[-1]):
            self._tokens.pop()

        expression = ''.join(self._tokens)
        try:
            result = evaluate_display(to_expression(self._tokens))
        except EvaluationError:
            self._tokens = [config.ERROR_TOKEN]
            return

        self.history_manager.add_calculation(expression, result)
        # Keep the result so the next operator chains from it
        self._tokens = [result]

    # ------------------- Clear all -------------------

    def clear_all_dialog(self):
        self.show_confirmation = True

    def confirm_clear_all(self):
        """Clear current tokens and history"""
        self._tokens = []
        self.history_manager.clear_calculation_history()
        self.show_confirmation = False

    def cancel_clear_all(self):
        self.show_confirmation = False

    # ------------------- Key dispatch -------------------

    def press(self, key):
        """Apply a single button or keyboard key"""
        key = KEY_ALIASES.get(key, key)

        if len(key) == 1 and key in '0123456789':
            self.append_digit(key)
        elif key == '.':
            self.append_dot()
        elif is_operator(key):
            self.set_operator(key)
        elif is_bracket(key):
            self.append_bracket(key)
        elif key == '±':
            self.toggle_sign()
        elif key == '%':
            self.percentage()
        elif key == 'DEL':
            self.delete()
        elif key == '=':
            self.calculate()
        elif key == 'C':
            self.clear()
        else:
            raise UnknownKeyError(f"Unknown key: {key!r}")


# Keyboard characters and key names -> button labels
KEY_ALIASES = {
    '*': '×',
    '/': '÷',
    '**': '^',
    '−': '-',
    'neg': '±',
    'BackSpace': 'DEL',
    'Delete': 'DEL',
    '\r': '=',
    '\n': '=',
    'Enter': '=',
    'Return': '=',
    'Escape': 'C',
}
