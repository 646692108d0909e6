import logging
import re

logger = logging.getLogger(__name__)

# Default delimiters, active together when no custom delimiter is declared.
DEFAULT_DELIMITERS = [',', ':']

# "//<delimiter>\n<body>". The delimiter is everything up to the first newline.
CUSTOM_DELIMITER_PATTERN = re.compile(r'//([^\n]+)\n(.*)', re.DOTALL)

TERM_PATTERN = re.compile(r'-?[0-9]+')


class StringCalculatorError(ValueError):
    """Base class for every input the calculator refuses."""


class InvalidFormatError(StringCalculatorError):
    def __init__(self, token):
        self.token = token
        super().__init__(f"not a number: {token!r}")


class NegativeValueError(StringCalculatorError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"negatives not allowed: {value}")


def parse_delimiters(numbers):
    """Split a custom delimiter declaration off the front of the input.

    Returns the active delimiters and the body left to tokenize.
    """
    match = CUSTOM_DELIMITER_PATTERN.match(numbers)
    if match is None:
        return DEFAULT_DELIMITERS, numbers
    delimiter, body = match.groups()
    logger.debug("custom delimiter %r", delimiter)
    return [delimiter], body


def split_terms(body, delimiters):
    # Escape each delimiter so characters like '*' or '|' are matched literally
    split_pattern = '|'.join(map(re.escape, delimiters))
    return re.split(split_pattern, body)


def parse_term(term):
    if not TERM_PATTERN.fullmatch(term):
        raise InvalidFormatError(term)
    number = int(term)
    if number < 0:
        raise NegativeValueError(number)
    return number


def add(numbers):
    """Sum the non-negative integers in ``numbers``.

    ``None`` and ``""`` give 0. Terms are separated by ',' or ':' unless the
    input starts with a ``//<delimiter>\\n`` declaration, in which case only
    that delimiter separates them. Terms are checked left to right and the
    first bad one raises, either ``InvalidFormatError`` or
    ``NegativeValueError``.
    """
    if numbers is None:
        return 0
    if not isinstance(numbers, str):
        raise TypeError(f"expected str or None, got {type(numbers).__name__}")
    if not numbers:
        return 0

    delimiters, body = parse_delimiters(numbers)
    if not body:
        return 0

    total = 0
    for term in split_terms(body, delimiters):
        total += parse_term(term)
    return total


class StringCalculator:
    def add(self, numbers):
        return add(numbers)
