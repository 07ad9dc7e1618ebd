import pytest

from flashdeck.extractor import source_info

DELEGATE_NOTE = """## Basics
**Q: What is a delegate?**
A: A type-safe function pointer.
"""

ADVANCED_NOTE = """### Example
- one
- two

## Patterns
✅ Good example
```csharp
var x = 1;
```
"""

PRACTICE_NOTE = """**Q: What does `async` do?**
A: Marks a method as asynchronous.
"""


@pytest.fixture
def delegate_note():
    return DELEGATE_NOTE


@pytest.fixture
def info():
    return source_info("/repo/notes/csharp/basics.md", "/repo")


@pytest.fixture
def notes_repo(tmp_path):
    """A repo root with notes/ and practice/ folders of Markdown files."""
    csharp = tmp_path / "notes" / "csharp"
    csharp.mkdir(parents=True)
    (csharp / "basics.md").write_text(DELEGATE_NOTE, encoding="utf-8")
    (csharp / "advanced.md").write_text(ADVANCED_NOTE, encoding="utf-8")
    (csharp / "readme.txt").write_text("**Q: ignored?**\nA: yes\n", encoding="utf-8")

    practice = tmp_path / "practice"
    practice.mkdir()
    (practice / "intro.MD").write_text(PRACTICE_NOTE, encoding="utf-8")
    return tmp_path
