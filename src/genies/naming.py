"""
genies.naming - Component Name Transformations
==============================================

Pure functions that turn a free-form component name ("my button",
"myButton", "my_button") into a file name for the configured naming style
and into a component identifier for the template.

All styles share one word segmentation, so every spelling of the same
words yields the same result:

>>> split_words("my button")
['my', 'button']
>>> split_words("myButton")
['my', 'Button']
>>> split_words("XMLParser-v2")
['XML', 'Parser', 'v', '2']
>>> to_file_name("my button", NamingStyle.KEBAB_CASE)
'my-button'
>>> to_symbol_name("my-button")
'MyButton'
"""

from __future__ import annotations

import re
import unicodedata

from genies.models import NamingStyle


# An alphanumeric run. Underscores and everything else separate runs.
_RUN_RE = re.compile(r"[^\W_]+")


def _starts_word(run: str, index: int) -> bool:
    previous, current = run[index - 1], run[index]
    following = run[index + 1 : index + 2]

    if previous.isdigit() != current.isdigit():
        return True
    if previous.islower() and current.isupper():
        return True
    # The last capital of an acronym starts the next word: XMLParser.
    return previous.isupper() and current.isupper() and following.islower()


def _split_run(run: str) -> list[str]:
    words = []
    start = 0
    for index in range(1, len(run)):
        if _starts_word(run, index):
            words.append(run[start:index])
            start = index
    words.append(run[start:])
    return words


def split_words(raw: str) -> list[str]:
    """
    Split a name into words.

    Whitespace, hyphens, underscores and any other punctuation separate
    words, as do lower-to-upper case transitions, the end of an acronym and
    letter/digit boundaries. Letters of any script count; scripts without
    case ("日本") are only split at separators and digits.

    Parameters
    ----------
    raw : str
        Name as typed by the user.

    Returns
    -------
    list[str]
        Words in their original casing, NFC-normalized. Empty when ``raw``
        holds no letters or digits.
    """
    raw = unicodedata.normalize("NFC", raw)
    return [word for run in _RUN_RE.findall(raw) for word in _split_run(run)]


def _upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def to_file_name(raw: str, style: NamingStyle) -> str:
    """
    Build the file name (without extension) for a component.

    Parameters
    ----------
    raw : str
        Component name as typed by the user.

    style : NamingStyle
        Configured naming convention.

    Returns
    -------
    str
        ``myButton``, ``my-button``, ``my_button`` or ``MyButton``.

    Notes
    -----
    Applying the function to its own output with the same style returns
    the same value.
    """
    words = split_words(raw)
    style = NamingStyle(style)

    if style is NamingStyle.CAMEL_CASE:
        lowered = [w.lower() for w in words]
        return "".join(lowered[:1] + [w.capitalize() for w in lowered[1:]])
    if style is NamingStyle.KEBAB_CASE:
        return "-".join(w.lower() for w in words)
    if style is NamingStyle.SNAKE_CASE:
        return "_".join(w.lower() for w in words)
    return "".join(_upper_first(w) for w in words)


def to_symbol_name(raw: str) -> str:
    """
    Build the component identifier substituted into the template.

    The identifier is always StartCase regardless of the file naming style,
    so that it is a valid component name in JSX. A name starting with a
    digit is prefixed with ``Component``.

    Examples
    --------
    >>> to_symbol_name("XML parser")
    'XmlParser'
    >>> to_symbol_name("3d card")
    'Component3DCard'
    """
    symbol = "".join(w.lower().capitalize() for w in split_words(raw))
    if not symbol or symbol[0].isdigit():
        symbol = f"Component{symbol}"
    return symbol
