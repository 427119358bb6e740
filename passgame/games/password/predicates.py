"""
Password Predicates - The checks behind each password rule.

Every predicate takes (text, context) and returns a bool. All of them
are total over str: no input, however long or strange, raises.

Character classes are spelled out as ASCII ranges on purpose: \\d and
re.IGNORECASE also match non-ASCII digits and letters.
"""

import math
import re

from ...engine_core.context import PlayContext
from ...engine_core.evaluator import PredicateRegistry

COMMON_WORDS = ("password", "123456", "qwerty", "admin", "login", "user")

ROMAN_VALUES = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}

COUNTRY_CAPITALS = (
    "FranceParis", "GermanyBerlin", "ItalyRome", "SpainMadrid",
    "JapanTokyo", "ChinaBeijing", "IndiaDelhi", "BrazilBrasilia",
)

ELEMENT_SYMBOLS = (
    "H", "He", "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar", "K", "Ca",
)

FIBONACCI_NUMBERS = (1, 1, 2, 3, 5, 8, 13, 21, 34, 55)

WORDLE_ANSWERS = ("ABOUT", "HEART", "WORLD", "SOUND", "GREAT")

SPONSOR_LINE = "This password is sponsored by NordVPN"

_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[!@#$%^&*]")
_ROMAN = re.compile(r"[IVXLCDM]")
_CHESS = re.compile(r"[KQRBN]?[a-h]?[1-8]?x?[a-h][1-8](\+|#)?|O-O(-O)?")
_VOWEL = re.compile(r"[aeiouAEIOU]")
_TEMPERATURE = re.compile(r"[0-9]+[CF]")
_ASCII_LETTER = re.compile(r"[a-zA-Z]")


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    for i in range(2, math.isqrt(n) + 1):
        if n % i == 0:
            return False
    return True


def roman_total(text: str) -> int | None:
    """
    Value of the roman numeral letters in text, read in order.

    A letter smaller than the one after it is subtracted. Returns
    None when there are no numeral letters at all.
    """
    letters = _ROMAN.findall(text)
    if not letters:
        return None
    total = 0
    for i, letter in enumerate(letters):
        current = ROMAN_VALUES[letter]
        following = ROMAN_VALUES[letters[i + 1]] if i + 1 < len(letters) else 0
        if following and current < following:
            total -= current
        else:
            total += current
    return total


def has_palindrome(text: str, min_length: int = 5) -> bool:
    """
    True if text contains a palindrome of at least min_length.

    Any longer palindrome has one of length min_length or
    min_length + 1 at its centre, so only those windows are checked.
    """
    for size in (min_length, min_length + 1):
        for start in range(len(text) - size + 1):
            window = text[start:start + size]
            if window == window[::-1]:
                return True
    return False


def create_password_registry() -> PredicateRegistry:
    """Registry with a predicate for every base and surprise rule."""
    registry = PredicateRegistry()
    rule = registry.rule

    @rule("length")
    def _length(text: str, ctx: PlayContext) -> bool:
        return len(text) >= 8

    @rule("uppercase")
    def _uppercase(text: str, ctx: PlayContext) -> bool:
        return _UPPER.search(text) is not None

    @rule("lowercase")
    def _lowercase(text: str, ctx: PlayContext) -> bool:
        return _LOWER.search(text) is not None

    @rule("number")
    def _number(text: str, ctx: PlayContext) -> bool:
        return _DIGIT.search(text) is not None

    @rule("special")
    def _special(text: str, ctx: PlayContext) -> bool:
        return _SPECIAL.search(text) is not None

    @rule("no-common")
    def _no_common(text: str, ctx: PlayContext) -> bool:
        lowered = text.lower()
        return not any(word in lowered for word in COMMON_WORDS)

    @rule("sum-25")
    def _sum_25(text: str, ctx: PlayContext) -> bool:
        digits = _DIGIT.findall(text)
        return bool(digits) and sum(int(d) for d in digits) == 25

    @rule("prime-length")
    def _prime_length(text: str, ctx: PlayContext) -> bool:
        return is_prime(len(text))

    @rule("current-month")
    def _current_month(text: str, ctx: PlayContext) -> bool:
        return ctx.month in text

    @rule("roman-numerals")
    def _roman_numerals(text: str, ctx: PlayContext) -> bool:
        return roman_total(text) == 100

    @rule("palindrome")
    def _palindrome(text: str, ctx: PlayContext) -> bool:
        return has_palindrome(text)

    @rule("country-capital")
    def _country_capital(text: str, ctx: PlayContext) -> bool:
        return any(pair in text for pair in COUNTRY_CAPITALS)

    @rule("chess-notation")
    def _chess_notation(text: str, ctx: PlayContext) -> bool:
        return _CHESS.search(text) is not None

    @rule("periodic-element")
    def _periodic_element(text: str, ctx: PlayContext) -> bool:
        return sum(1 for symbol in ELEMENT_SYMBOLS if symbol in text) >= 3

    @rule("moon-phase")
    def _moon_phase(text: str, ctx: PlayContext) -> bool:
        return "🌙" in text or ctx.moon_phase in text

    @rule("fibonacci")
    def _fibonacci(text: str, ctx: PlayContext) -> bool:
        return any(str(n) in text for n in FIBONACCI_NUMBERS)

    @rule("captcha")
    def _captcha(text: str, ctx: PlayContext) -> bool:
        return "chicken" in text.lower()

    @rule("no-vowels")
    def _no_vowels(text: str, ctx: PlayContext) -> bool:
        return _VOWEL.search(text) is None

    @rule("all-vowels")
    def _all_vowels(text: str, ctx: PlayContext) -> bool:
        lowered = text.lower()
        return all(v in lowered for v in "aeiou")

    @rule("exactly-16")
    def _exactly_16(text: str, ctx: PlayContext) -> bool:
        return len(text) == 16

    @rule("exactly-32")
    def _exactly_32(text: str, ctx: PlayContext) -> bool:
        return len(text) == 32

    @rule("todays-weather")
    def _todays_weather(text: str, ctx: PlayContext) -> bool:
        if ctx.temperature:
            return ctx.temperature in text
        return _TEMPERATURE.search(text) is not None

    @rule("sponsors")
    def _sponsors(text: str, ctx: PlayContext) -> bool:
        return SPONSOR_LINE in text

    @rule("wordle")
    def _wordle(text: str, ctx: PlayContext) -> bool:
        upper = text.upper()
        answers = (ctx.wordle_answer.upper(),) if ctx.wordle_answer else WORDLE_ANSWERS
        return any(word in upper for word in answers)

    @rule("captcha-math")
    def _captcha_math(text: str, ctx: PlayContext) -> bool:
        return "never" in text or "parallel" in text

    @rule("delete-password")
    def _delete_password(text: str, ctx: PlayContext) -> bool:
        return len(text) == 0

    # Surprise rules

    @rule("password-length-pi")
    def _password_length_pi(text: str, ctx: PlayContext) -> bool:
        # An int never equals pi
        return len(text) == math.pi

    @rule("include-user-ip")
    def _include_user_ip(text: str, ctx: PlayContext) -> bool:
        return ctx.ip_address in text

    @rule("no-keyboard-letters")
    def _no_keyboard_letters(text: str, ctx: PlayContext) -> bool:
        return _ASCII_LETTER.search(text) is None

    return registry
