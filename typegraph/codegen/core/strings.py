"""
Identifier legalization, word splitting and word combination.

Arbitrary upstream labels are split into words, every word is legalized
for the target language, and the words are joined back together under a
case style. Nothing in here raises on malformed input.
"""

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Sequence

CharPredicate = Callable[[str], bool]
WordStyle = Callable[[str], str]
Legalizer = Callable[[str], str]

_PART_CATEGORIES = {"Nd", "Pc", "Mn", "Mc"}
_MARK_CATEGORIES = {"Mn", "Mc"}

# Placeholders used when a label has no usable characters or starts badly
EMPTY_WORD = "empty"
PREFIX_WORD = "the"


# Character predicates


def is_start_character(char: str) -> bool:
    """Letters and underscore may start an identifier."""
    return char.isalpha() or char == "_"


def is_part_character(char: str) -> bool:
    """Characters allowed after the first one of an identifier."""
    return unicodedata.category(char) in _PART_CATEGORIES or is_start_character(
        char
    )


def is_ascii_letter_or_underscore_or_digit(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


def _is_mark(char: str) -> bool:
    return unicodedata.category(char) in _MARK_CATEGORIES


def _is_caseless_letter(char: str) -> bool:
    return char.isalpha() and not char.isupper() and not char.islower()


def legalize_characters(is_legal: CharPredicate) -> Legalizer:
    """
    Build a function that drops every character failing ``is_legal``.

    Illegal characters are removed, never substituted.
    """

    def legalize(text: str) -> str:
        return "".join(char for char in text if is_legal(char))

    return legalize


# Word splitting


class WordCasing(Enum):
    """Casing detected for a single word."""

    UPPER = "upper"  # HTTP
    LOWER = "lower"  # user, 123
    CAPITALIZED = "capitalized"  # Server
    MIXED = "mixed"  # iOS


def detect_casing(text: str) -> WordCasing:
    """Classify the casing of ``text``; caseless text counts as lower."""
    cased = [char for char in text if char.isupper() or char.islower()]
    if not cased:
        return WordCasing.LOWER
    if all(char.isupper() for char in cased):
        return WordCasing.UPPER
    if all(char.islower() for char in cased):
        return WordCasing.LOWER
    if cased[0].isupper() and all(char.islower() for char in cased[1:]):
        return WordCasing.CAPITALIZED
    return WordCasing.MIXED


@dataclass(frozen=True)
class Word:
    """One word of a label together with its detected casing."""

    text: str
    casing: WordCasing

    @property
    def is_acronym(self) -> bool:
        return self.casing == WordCasing.UPPER


def split_into_words(label: str) -> List[Word]:
    """
    Split a label into words.

    Words are maximal runs of lowercase letters, uppercase letters, digits
    or caseless letters. An uppercase run directly followed by lowercase
    letters gives its last capital to the next word, so ``HTTPServer``
    becomes ``HTTP`` and ``Server``. Every other character separates words
    and is dropped; combining marks stay with the word they follow.

    Args:
        label: Arbitrary upstream label

    Returns:
        Words in label order
    """
    words: List[Word] = []
    length = len(label)
    index = 0

    def run_end(start: int, belongs: CharPredicate) -> int:
        end = start
        while end < length:
            char = label[end]
            if belongs(char) or (end > start and _is_mark(char)):
                end += 1
            else:
                break
        return end

    while index < length:
        char = label[index]
        if _is_mark(char) or not (char.isalpha() or char.isdecimal()):
            index += 1
            continue

        start = index
        if char.islower():
            index = run_end(index, str.islower)
        elif char.isupper():
            index = run_end(index, str.isupper)
            if index < length and label[index].islower():
                last_capital = index - 1
                while _is_mark(label[last_capital]):
                    last_capital -= 1
                if last_capital > start:
                    upper = label[start:last_capital]
                    words.append(Word(upper, detect_casing(upper)))
                    start = last_capital
                index = run_end(index, str.islower)
        elif char.isdecimal():
            index = run_end(index, str.isdecimal)
        else:
            index = run_end(index, _is_caseless_letter)

        text = label[start:index]
        words.append(Word(text, detect_casing(text)))

    return words


# Word styles


def first_upper_word_style(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def all_upper_word_style(word: str) -> str:
    return word.upper()


def all_lower_word_style(word: str) -> str:
    return word.lower()


def original_word_style(word: str) -> str:
    return word


def combine_words(
    words: Sequence[Word],
    legalize: Legalizer,
    first_word_style: WordStyle,
    rest_word_style: WordStyle,
    first_acronym_style: WordStyle,
    rest_acronym_style: WordStyle,
    separator: str,
    is_start: CharPredicate,
) -> str:
    """
    Join words into one identifier.

    Each word is legalized first; words that legalize to nothing are
    dropped. Acronyms (all-upper words) use the acronym styles. If nothing
    is left the placeholder word ``empty`` is used, and if the styled first
    word cannot start an identifier the word ``the`` is put in front.

    Args:
        words: Words from ``split_into_words``
        legalize: Character filter applied to every word
        first_word_style: Style for the first word
        rest_word_style: Style for following words
        first_acronym_style: Style for the first word when it is an acronym
        rest_acronym_style: Style for following acronyms
        separator: Text placed between words
        is_start: Predicate for the first character of the identifier

    Returns:
        A non-empty identifier
    """
    legal_words: List[Word] = []
    for word in words:
        text = legalize(word.text)
        if text:
            legal_words.append(Word(text, word.casing))

    if not legal_words:
        placeholder = legalize(EMPTY_WORD)
        if not placeholder:
            raise ValueError(f"Word {EMPTY_WORD!r} is not legal in the target")
        legal_words.append(Word(placeholder, WordCasing.LOWER))

    first = legal_words[0]
    first_style = first_acronym_style if first.is_acronym else first_word_style
    styled_first = first_style(first.text)

    styled_words: List[str] = []
    if is_start(styled_first[0]):
        styled_words.append(styled_first)
        rest_words = legal_words[1:]
    else:
        prefix = legalize(PREFIX_WORD)
        if not prefix:
            raise ValueError(f"Word {PREFIX_WORD!r} is not legal in the target")
        styled_words.append(first_word_style(prefix))
        rest_words = legal_words

    for word in rest_words:
        style = rest_acronym_style if word.is_acronym else rest_word_style
        styled_words.append(style(word.text))

    return separator.join(styled_words)
