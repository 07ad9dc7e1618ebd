"""Card extraction passes over a single Markdown file.

Each pass is an independent line scanner over the same text:

  * ``extract_qa``       -- ``**Q: ...**`` / ``A: ...`` pairs
  * ``extract_sections`` -- blocks introduced by ``###`` headings
  * ``extract_concepts`` -- code blocks flagged as good or bad practice

All three can fire on the same file; duplicated content across card kinds is
expected.
"""

import os
from pathlib import Path
from typing import List, NamedTuple, Optional, Union

from .config import DEFAULT_LANGUAGE, DEFAULT_TOPIC
from .markdown import (
    ANSWER_LINE,
    BULLET_LINE,
    FENCE_LINE,
    H2_LINE,
    H3_LINE,
    QUESTION_LINE,
    clean_markdown,
    detect_code_type,
    is_heading,
    is_rule,
    split_lines,
)
from .models import AnswerItem, Card, CodeItem


class SourceInfo(NamedTuple):
    source: str
    category: str
    topic: str


def source_info(source_path: Union[str, Path], repo_root: Union[str, Path]) -> SourceInfo:
    """Derive the card metadata from a file's path relative to the repo root.

    Example:
        >>> source_info("/repo/notes/csharp/basics.md", "/repo")
        SourceInfo(source='notes/csharp/basics.md', category='notes', topic='csharp')
    """
    source = os.path.relpath(str(source_path), str(repo_root)).replace("\\", "/")
    parts = source.split("/")
    topic = parts[1] if len(parts) > 1 else DEFAULT_TOPIC
    return SourceInfo(source=source, category=parts[0], topic=topic)


def _card(question: str, answer: List[AnswerItem], info: SourceInfo) -> Card:
    return {
        "question": question,
        "answer": answer,
        "category": info.category,
        "topic": info.topic,
        "source": info.source,
    }


def _code_item(language: Optional[str], code_lines: List[str], code_type: str) -> CodeItem:
    return {
        "type": "code",
        "language": language or DEFAULT_LANGUAGE,
        "code": "\n".join(code_lines),
        "codeType": code_type,
    }


def extract_qa(markdown: str, info: SourceInfo) -> List[Card]:
    """Extract question/answer cards.

    A ``**Q: ...**`` line opens a question, ``A: ...`` lines add answer text
    and fenced code becomes a code item tagged by nearby good/bad markers.
    Other prose lines continue the last text item; when the last item is
    code the line is dropped. An ``##`` heading closes the open question.
    Pairs without an answer are discarded.
    """
    cards: List[Card] = []
    lines = split_lines(markdown)
    question: Optional[str] = None
    answer: List[AnswerItem] = []
    in_code = False
    language: Optional[str] = None
    code_lines: List[str] = []
    code_type: Optional[str] = None

    def flush() -> None:
        if question and answer:
            cards.append(_card(question, answer, info))

    for i, line in enumerate(lines):
        fence = FENCE_LINE.match(line)
        if fence:
            if not in_code:
                in_code = True
                language = fence.group(1)
                code_lines = []
                code_type = detect_code_type(lines, i)
            else:
                if answer and code_lines:
                    answer.append(_code_item(language, code_lines, code_type or "neutral"))
                in_code = False
                code_lines = []
                code_type = None
            continue

        if in_code:
            code_lines.append(line)
            continue

        q_match = QUESTION_LINE.match(line)
        if q_match:
            flush()
            question = clean_markdown(q_match.group(1))
            answer = []
            continue

        a_match = ANSWER_LINE.match(line)
        if a_match and question:
            answer.append({"type": "text", "content": clean_markdown(a_match.group(1))})
            continue

        if question and line.strip() and not is_heading(line) and not is_rule(line):
            if answer and answer[-1]["type"] == "text":
                answer[-1]["content"] += " " + clean_markdown(line)
            continue

        if H2_LINE.match(line):
            flush()
            question = None
            answer = []

    flush()
    return cards


def extract_sections(markdown: str, info: SourceInfo) -> List[Card]:
    """Extract one card per ``###`` section.

    Section content keeps its order: paragraphs become text items, bullet
    runs become a single list item and fenced code becomes a neutral code
    item. A horizontal rule ends the section; an ``##`` heading does not.
    """
    sections: List[Card] = []
    lines = split_lines(markdown)
    title: Optional[str] = None
    content: List[AnswerItem] = []
    in_code = False
    language: Optional[str] = None
    code_lines: List[str] = []
    list_items: Optional[List[str]] = None

    def flush_list() -> None:
        nonlocal list_items
        if list_items:
            content.append({"type": "list", "items": list_items})
        list_items = None

    def save_section() -> None:
        nonlocal title, content
        flush_list()
        if title and content:
            card = _card(title, content, info)
            card["isSection"] = True
            sections.append(card)
        title = None
        content = []

    for line in lines:
        if in_code:
            if FENCE_LINE.match(line):
                if title and code_lines:
                    content.append(_code_item(language, code_lines, "neutral"))
                in_code = False
                code_lines = []
            else:
                code_lines.append(line)
            continue

        fence = FENCE_LINE.match(line)
        if fence:
            flush_list()
            in_code = True
            language = fence.group(1)
            code_lines = []
            continue

        h3 = H3_LINE.match(line)
        if h3:
            save_section()
            title = clean_markdown(h3.group(1))
            continue

        if title is None:
            continue

        bullet = BULLET_LINE.match(line)
        if bullet:
            if list_items is None:
                list_items = []
            list_items.append(clean_markdown(bullet.group(1)))
            continue

        if not line.strip():
            flush_list()
            continue

        if is_rule(line):
            save_section()
            continue

        if line.startswith("#"):
            flush_list()
            continue

        if list_items:
            list_items[-1] += " " + clean_markdown(line)
            continue

        if not line.startswith("**Q:"):
            content.append({"type": "text", "content": clean_markdown(line)})

    save_section()
    return sections


def extract_concepts(markdown: str, info: SourceInfo) -> List[Card]:
    """Extract a card for every code block marked as good or bad practice.

    The card is titled by the latest ``##`` heading not yet used by a code
    block, falling back to "Good Practice Example" / "Bad Practice Example".
    """
    concepts: List[Card] = []
    lines = split_lines(markdown)
    in_code = False
    language: Optional[str] = None
    code_lines: List[str] = []
    code_type: Optional[str] = None
    title: Optional[str] = None

    for i, line in enumerate(lines):
        fence = FENCE_LINE.match(line)
        if fence:
            if not in_code:
                in_code = True
                language = fence.group(1)
                code_lines = []
                code_type = detect_code_type(lines, i)
            else:
                if code_type and code_lines:
                    question = title or f"{code_type.capitalize()} Practice Example"
                    card = _card(question, [_code_item(language, code_lines, code_type)], info)
                    card["isConcept"] = True
                    concepts.append(card)
                in_code = False
                code_lines = []
                code_type = None
                title = None
            continue

        if in_code:
            code_lines.append(line)
            continue

        h2 = H2_LINE.match(line)
        if h2:
            title = clean_markdown(h2.group(1))

    return concepts


class ExtractedCards(NamedTuple):
    qa: List[Card]
    sections: List[Card]
    concepts: List[Card]

    def combined(self) -> List[Card]:
        """Cards in pass order: Q&A, sections, concepts."""
        return [*self.qa, *self.sections, *self.concepts]


def extract_cards(markdown: str, info: SourceInfo) -> ExtractedCards:
    return ExtractedCards(
        qa=extract_qa(markdown, info),
        sections=extract_sections(markdown, info),
        concepts=extract_concepts(markdown, info),
    )
