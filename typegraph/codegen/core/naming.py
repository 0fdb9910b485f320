"""
Naming utilities for safe code generation.

Builds case-style functions on top of the word splitter/combiner and
resolves conflicts with forbidden words and names already taken in a scope.
"""

from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Set, Tuple

from .strings import (
    CharPredicate,
    Legalizer,
    WordStyle,
    all_lower_word_style,
    all_upper_word_style,
    combine_words,
    first_upper_word_style,
    is_start_character,
    split_into_words,
)

NameStyle = Callable[[str], str]


class NamingCase(Enum):
    """Different naming case styles."""

    PASCAL_CASE = "pascal"  # UserName
    CAMEL_CASE = "camel"  # userName
    SNAKE_CASE = "snake"  # user_name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


# first word, rest words, first acronym, rest acronyms, separator
_CASE_STYLES: Dict[NamingCase, Tuple[WordStyle, WordStyle, WordStyle, WordStyle, str]] = {
    NamingCase.PASCAL_CASE: (
        first_upper_word_style,
        first_upper_word_style,
        all_upper_word_style,
        all_upper_word_style,
        "",
    ),
    NamingCase.CAMEL_CASE: (
        all_lower_word_style,
        first_upper_word_style,
        all_lower_word_style,
        all_upper_word_style,
        "",
    ),
    NamingCase.SNAKE_CASE: (
        all_lower_word_style,
        all_lower_word_style,
        all_lower_word_style,
        all_lower_word_style,
        "_",
    ),
    NamingCase.SCREAMING_SNAKE: (
        all_upper_word_style,
        all_upper_word_style,
        all_upper_word_style,
        all_upper_word_style,
        "_",
    ),
}


def make_name_style(
    case: NamingCase,
    legalize: Legalizer,
    is_start: CharPredicate = is_start_character,
) -> NameStyle:
    """
    Create a function that turns a raw label into an identifier.

    Args:
        case: Target case style
        legalize: Character filter applied to every word
        is_start: Predicate for the first identifier character

    Returns:
        Function mapping labels to styled identifiers
    """
    first, rest, first_acronym, rest_acronym, separator = _CASE_STYLES[case]

    def style(label: str) -> str:
        return combine_words(
            split_into_words(label),
            legalize,
            first,
            rest,
            first_acronym,
            rest_acronym,
            separator,
            is_start,
        )

    return style


class Namer:
    """Assigns unique names within one scope."""

    def __init__(
        self,
        name_style: NameStyle,
        forbidden: Optional[Iterable[str]] = None,
        scope: str = "global",
    ):
        """
        Initialize namer.

        Args:
            name_style: Function styling a raw label
            forbidden: Names that must never be produced bare
            scope: Scope description, used in diagnostics only
        """
        self.name_style = name_style
        self.forbidden: Set[str] = set(forbidden or ())
        self.scope = scope
        self._used_names: Set[str] = set()

    def assign(self, proposal: str, suffix_on_conflict: str = "_") -> str:
        """
        Style a proposal and make it unique in this scope.

        Args:
            proposal: Raw label proposed by the type graph
            suffix_on_conflict: Suffix added to forbidden words

        Returns:
            Final name, recorded as used
        """
        return self._resolve_conflicts(self.name_style(proposal), suffix_on_conflict)

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve conflicts with forbidden words and existing names."""
        if name in self.forbidden:
            name = f"{name}{suffix}"

        original_name = name
        counter = 1
        while name in self._used_names or name in self.forbidden:
            name = f"{original_name}{counter}"
            counter += 1

        self._used_names.add(name)
        return name

    @property
    def used_names(self) -> Set[str]:
        return set(self._used_names)
