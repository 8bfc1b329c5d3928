"""
Classes & functions that represent core elements of the PDF syntax.

A dictionary value is one of a closed set of shapes:

* ``int`` / ``float``: a PDF number
* ``bool``: ``true`` / ``false``
* ``str`` (or ``Name``): a literal name, rendered as ``/Value``
* ``list`` / ``tuple``: an array, each item being a value itself
* ``None``: ``null``
* ``ABSENT``: the key is omitted from the rendered dictionary
* ``Ref``: an indirect object reference, ``12 0 R``
* ``PDFString``: a literal string, between parentheses
* ``PDFDict``: a nested dictionary

Anything else is rejected by render_value() with an UnsupportedValueError.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Union

from .errors import UnsupportedValueError
from .util import escape_parens, number_to_str


class _Absent:
    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


class Name(str):
    "A literal name, e.g. /Helvetica"

    def serialize(self) -> str:
        return f"/{self}"


@dataclass(frozen=True)
class Ref:
    "Reference to an indirect object, by its number & generation"

    number: int
    generation: int = 0

    def serialize(self) -> str:
        return f"{self.number} {self.generation} R"


@dataclass(frozen=True)
class PDFString:
    value: str

    def serialize(self) -> str:
        return f"({escape_parens(self.value)})"


class PDFDict(dict):  # type: ignore[type-arg]
    "A nested dictionary, rendered inline inside its parent"

    def serialize(self) -> str:
        return create_dictionary_string(self)


PDFValue = Union[
    int, float, bool, str, list, tuple, None, _Absent, Ref, PDFString, PDFDict
]


def render_value(value: Any) -> str:
    """
    Render a single dictionary value.
    Returns an empty string for ABSENT, so that the enclosing key gets dropped.
    """
    if value is ABSENT:
        return ""
    if value is None:
        return "null"
    # bool must be checked before int, as it is a subclass of it:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return number_to_str(value)
    if isinstance(value, (Ref, PDFString, PDFDict, Name)):
        return value.serialize()
    if isinstance(value, str):
        return f"/{value}"
    if isinstance(value, (list, tuple)):
        return create_list_string(value)
    raise UnsupportedValueError(
        f"Cannot render {type(value).__name__} value {value!r} in a PDF dictionary"
    )


def create_list_string(items: Union[list, tuple]) -> str:  # type: ignore[type-arg]
    "Render an array, as [ a b c ]"
    return "".join(["[ "] + [f"{render_value(item)} " for item in items] + ["]"])


def create_dictionary_string(dictionary: Mapping[str, Any]) -> str:
    "Render a dictionary, one /Key value pair per line"
    out = ["<<"]
    for key, value in dictionary.items():
        rendered = render_value(value)
        if not rendered:
            continue
        out.append(f"/{key} {rendered}")
    out.append(">>")
    return "\n".join(out)
