"""Conversions between camelCase, snake_case and kebab-case key spellings."""

SEPARATORS = ("-", "_")


def to_snake_case(text: str) -> str:
    """Convert ``fooBar`` or ``foo-bar`` into ``foo_bar``."""
    return _to_separator_case(text, "_").lower()


def to_kebab_case(text: str) -> str:
    """Convert ``fooBar`` or ``foo_bar`` into ``foo-bar``."""
    return _to_separator_case(text, "-").lower()


def to_camel_case(text: str) -> str:
    """Convert ``foo_bar`` or ``foo-bar`` into ``fooBar``.

    Characters away from a separator are left untouched, so ``ABCD`` stays ``ABCD``.
    """
    result = []
    was_separator = False
    for char in text:
        is_separator = False
        if was_separator:
            # The first character after a separator is kept, even a second separator
            result.append(char.upper())
        elif char in SEPARATORS:
            is_separator = True
        else:
            result.append(char)
        was_separator = is_separator
    return "".join(result)


def _to_separator_case(text: str, separator: str) -> str:
    with_separators = _insert_separators_in_camel_case(text, separator)
    for existing in SEPARATORS:
        with_separators = with_separators.replace(existing, separator)
    return with_separators


def _insert_separators_in_camel_case(text: str, separator: str) -> str:
    result = []
    for index, char in enumerate(text):
        result.append(char)
        if index + 1 < len(text) and char.islower() and text[index + 1].isupper():
            result.append(separator)
    return "".join(result)
