"""
Password Rules - Rule definitions for the password game.

Levels run from 0 (Beginner) to 10 (Cosmic Horror). Catalog order is
the order rules unlock in, so it doubles as the difficulty curve.
"""

from ...engine_core.state import RuleDefinition


# ============================================================================
# Level 0-1 - Basic rules
# ============================================================================

LENGTH = RuleDefinition("length", "Password must be at least 8 characters long", 0)
UPPERCASE = RuleDefinition("uppercase", "Password must contain at least one uppercase letter", 0)
LOWERCASE = RuleDefinition("lowercase", "Password must contain at least one lowercase letter", 0)

NUMBER = RuleDefinition("number", "Password must contain at least one number", 1)
SPECIAL = RuleDefinition(
    "special",
    "Password must contain at least one special character (!@#$%^&*)",
    1,
)
NO_COMMON = RuleDefinition(
    "no-common",
    "Password cannot contain common words (password, 123456, qwerty)",
    1,
)

# ============================================================================
# Level 2-3 - Maths, dates
# ============================================================================

SUM_25 = RuleDefinition("sum-25", "The sum of all numbers in password must equal 25", 2)
PRIME_LENGTH = RuleDefinition("prime-length", "Password length must be a prime number", 2)

CURRENT_MONTH = RuleDefinition(
    "current-month",
    "Password must include the current month (07 for July)",
    3,
)
ROMAN_NUMERALS = RuleDefinition(
    "roman-numerals",
    "Password must contain Roman numerals that add up to 100 (C, L, X, V, I)",
    3,
)

# ============================================================================
# Level 4-6 - Word games, getting ridiculous
# ============================================================================

PALINDROME = RuleDefinition(
    "palindrome",
    "Password must contain a palindrome of at least 5 characters",
    4,
)
COUNTRY_CAPITAL = RuleDefinition(
    "country-capital",
    "Password must include a country and its capital (e.g., FranceParis)",
    4,
)

CHESS_NOTATION = RuleDefinition(
    "chess-notation",
    "Password must contain valid chess notation (e.g., e4, Nf3, O-O)",
    5,
)
PERIODIC_ELEMENT = RuleDefinition(
    "periodic-element",
    "Password must include at least 3 chemical element symbols (He, Li, Be, etc.)",
    5,
)

MOON_PHASE = RuleDefinition(
    "moon-phase",
    "Password must include the current moon phase emoji 🌙",
    6,
)
FIBONACCI = RuleDefinition(
    "fibonacci",
    "Password must contain Fibonacci sequence numbers (1,1,2,3,5,8,13...)",
    6,
)
CAPTCHA = RuleDefinition(
    "captcha",
    "Password must include the solution: What is 🐔 + 🥚? (Answer: chicken)",
    6,
)

# ============================================================================
# Level 7-8 - Contradictions and the impossible
# ============================================================================

NO_VOWELS = RuleDefinition("no-vowels", "Password must not contain any vowels (a, e, i, o, u)", 7)
ALL_VOWELS = RuleDefinition("all-vowels", "Password must contain all 5 vowels (a, e, i, o, u)", 7)

EXACTLY_16 = RuleDefinition("exactly-16", "Password must be exactly 16 characters long", 8)
EXACTLY_32 = RuleDefinition("exactly-32", "Password must be exactly 32 characters long", 8)
TODAYS_WEATHER = RuleDefinition(
    "todays-weather",
    "Password must include today's temperature in your city (e.g., 23C)",
    8,
)

# ============================================================================
# Level 9-10 - Pure madness
# ============================================================================

SPONSORS = RuleDefinition(
    "sponsors",
    'Password must include "This password is sponsored by NordVPN"',
    9,
)
WORDLE = RuleDefinition(
    "wordle",
    "Password must contain today's Wordle answer (you must guess correctly)",
    9,
)
CAPTCHA_MATH = RuleDefinition(
    "captcha-math",
    "Solve: If a train leaves at 2:30 PM going 60mph, and another at 3:00 PM "
    "going 80mph, when do they meet? Include answer in password.",
    9,
)

DELETE_PASSWORD = RuleDefinition(
    "delete-password",
    "Your password is too powerful. Please delete it.",
    10,
)

PASSWORD_RULES = [
    LENGTH, UPPERCASE, LOWERCASE,
    NUMBER, SPECIAL, NO_COMMON,
    SUM_25, PRIME_LENGTH,
    CURRENT_MONTH, ROMAN_NUMERALS,
    PALINDROME, COUNTRY_CAPITAL,
    CHESS_NOTATION, PERIODIC_ELEMENT,
    MOON_PHASE, FIBONACCI, CAPTCHA,
    NO_VOWELS, ALL_VOWELS,
    EXACTLY_16, EXACTLY_32, TODAYS_WEATHER,
    SPONSORS, WORDLE, CAPTCHA_MATH,
    DELETE_PASSWORD,
]

# ============================================================================
# Surprise rules - added one at a time on a successful submission
# ============================================================================

PASSWORD_LENGTH_PI = RuleDefinition(
    "password-length-pi",
    "Password length must be exactly π (3.14159...) characters long",
    10,
)
INCLUDE_USER_IP = RuleDefinition(
    "include-user-ip",
    "Password must include your current IP address",
    10,
)
NO_KEYBOARD_LETTERS = RuleDefinition(
    "no-keyboard-letters",
    "Password must not contain any letters that appear on a QWERTY keyboard",
    10,
)

SURPRISE_RULES = [
    PASSWORD_LENGTH_PI,
    INCLUDE_USER_IP,
    NO_KEYBOARD_LETTERS,
]
