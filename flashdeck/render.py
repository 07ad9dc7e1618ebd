"""HTML rendering for a single flash card.

Every string coming from a card is escaped before it is placed in markup, so
note content can never inject HTML into the page.
"""

from html import escape
from typing import List

from .config import DEFAULT_LANGUAGE
from .models import AnswerItem, Card

ERROR_TITLE = "Flash cards could not be loaded."
ERROR_HINT = 'Please refresh to try again or run "flashdeck-build" to generate cards.'

CODE_BADGES = {
    "good": "✅ Good Practice",
    "bad": "❌ Bad Practice",
}

SLIDE_CSS = """
<style>
.flash-card-container { opacity: 0; transition: opacity 0.6s ease; padding: 1.5rem;
  border-radius: 12px; background: #1e1e2e; color: #f5f5f5; }
.flash-card-container.visible { opacity: 1; }
.card-type-badge { display: inline-block; font-size: 0.8rem; padding: 0.1rem 0.6rem;
  border-radius: 999px; margin-bottom: 0.8rem; }
.card-type-badge.concept { background: #7c3aed; }
.card-type-badge.qa { background: #2563eb; }
.code-wrapper { border-left: 4px solid #6b7280; margin: 0.8rem 0; }
.code-wrapper.good { border-color: #16a34a; }
.code-wrapper.bad { border-color: #dc2626; }
.code-badge { font-size: 0.8rem; padding: 0.2rem 0.6rem; }
.card-meta { margin-top: 1rem; font-size: 0.85rem; color: #9ca3af; }
</style>
"""


def card_kind(card: Card) -> str:
    return "Concept" if card.get("isConcept") else "Q&A"


def card_meta(card: Card) -> str:
    """Join topic and category with a bullet, skipping empty parts."""
    parts = []
    for part in (card.get("topic"), card.get("category")):
        if isinstance(part, str) and part.strip():
            parts.append(part.strip())
    return " • ".join(parts)


def _render_item(item: AnswerItem) -> str:
    kind = item.get("type")
    if kind == "text":
        return f'<p class="answer-text">{escape(item.get("content", ""))}</p>'
    if kind == "list":
        entries = "".join(f"<li>{escape(entry)}</li>" for entry in item.get("items", []))
        return f'<ul class="answer-list">{entries}</ul>'
    if kind == "code":
        code_type = item.get("codeType") or "neutral"
        language = item.get("language") or DEFAULT_LANGUAGE
        badge = ""
        if code_type in CODE_BADGES:
            badge = f'<div class="code-badge {code_type}">{CODE_BADGES[code_type]}</div>'
        return (
            f'<div class="code-wrapper {escape(code_type)}">{badge}'
            f'<pre><code class="language-{escape(language)}">{escape(item.get("code", ""))}</code></pre>'
            f"</div>"
        )
    return ""


def render_card_html(card: Card, visible: bool = True) -> str:
    """Render a card as an HTML fragment.

    Args:
        card: Card record from the dataset.
        visible: Whether the container carries the `visible` class; the
            slideshow clears it while the card fades out.
    """
    is_concept = bool(card.get("isConcept"))
    badge_class = "concept" if is_concept else "qa"
    answer: List[str] = [_render_item(item) for item in card.get("answer") or []]
    container_class = "flash-card-container visible" if visible else "flash-card-container"
    return (
        f'<div class="{container_class}">'
        f'<span class="card-type-badge {badge_class}">{card_kind(card)}</span>'
        f'<h2 class="card-question">{escape(card.get("question") or "")}</h2>'
        f'<div class="card-answer">{"".join(answer)}</div>'
        f'<div class="card-meta">{escape(card_meta(card))}</div>'
        f"</div>"
    )


def render_error_html() -> str:
    return (
        '<div class="flash-card-container visible">'
        f'<h2 class="card-question">{escape(ERROR_TITLE)}</h2>'
        f'<div class="card-meta">{escape(ERROR_HINT)}</div>'
        "</div>"
    )
