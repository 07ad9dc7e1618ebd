from flashdeck.render import card_kind, card_meta, render_card_html, render_error_html


def make_card(**overrides):
    card = {
        "question": "What is a delegate?",
        "answer": [{"type": "text", "content": "A type-safe function pointer."}],
        "category": "notes",
        "topic": "csharp",
        "source": "notes/csharp/basics.md",
        "id": "card-1",
    }
    card.update(overrides)
    return card


def test_card_kind():
    assert card_kind(make_card()) == "Q&A"
    assert card_kind(make_card(isSection=True)) == "Q&A"
    assert card_kind(make_card(isConcept=True)) == "Concept"


def test_card_meta_skips_empty_parts():
    assert card_meta(make_card()) == "csharp • notes"
    assert card_meta(make_card(topic="  ")) == "notes"
    assert card_meta(make_card(topic=None, category="")) == ""


def test_render_escapes_card_text():
    card = make_card(
        question="<script>alert(1)</script>",
        answer=[{"type": "text", "content": "<b>bold</b> & more"}],
    )
    html = render_card_html(card)
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "&lt;b&gt;bold&lt;/b&gt; &amp; more" in html


def test_render_answer_items_in_order():
    card = make_card(
        isConcept=True,
        answer=[
            {"type": "text", "content": "first"},
            {"type": "list", "items": ["a", "b"]},
            {"type": "code", "language": "python", "code": "if x < 1:\n    pass", "codeType": "bad"},
        ],
    )
    html = render_card_html(card)
    assert html.index("first") < html.index("<li>a</li>") < html.index("language-python")
    assert '<span class="card-type-badge concept">Concept</span>' in html
    assert "❌ Bad Practice" in html
    assert "if x &lt; 1:\n    pass" in html


def test_render_neutral_code_has_no_badge():
    card = make_card(answer=[{"type": "code", "language": "", "code": "x", "codeType": "neutral"}])
    html = render_card_html(card)
    assert "code-badge" not in html
    assert 'class="language-csharp"' in html


def test_render_visibility_class():
    assert 'class="flash-card-container visible"' in render_card_html(make_card())
    assert 'class="flash-card-container"' in render_card_html(make_card(), visible=False)


def test_render_error_html():
    html = render_error_html()
    assert "Flash cards could not be loaded." in html
    assert "flashdeck-build" in html
