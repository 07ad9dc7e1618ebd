"""Shapes of the records written to the flash card dataset.

Cards stay plain dicts so they serialise straight to JSON; these types only
document the keys.
"""

from typing import List, Literal, TypedDict, Union

CodeType = Literal["good", "bad", "neutral"]


class TextItem(TypedDict):
    type: Literal["text"]
    content: str


class CodeItem(TypedDict):
    type: Literal["code"]
    language: str
    code: str
    codeType: CodeType


class ListItem(TypedDict):
    type: Literal["list"]
    items: List[str]


AnswerItem = Union[TextItem, CodeItem, ListItem]


class _CardBase(TypedDict):
    question: str
    answer: List[AnswerItem]
    category: str
    topic: str
    source: str


class Card(_CardBase, total=False):
    id: str
    isSection: bool
    isConcept: bool
