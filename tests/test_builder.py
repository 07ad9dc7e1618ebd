import json
from datetime import datetime, timezone

import pytest

from flashdeck import cli
from flashdeck.builder import (
    build_dataset,
    collect_markdown_files,
    render_dataset_script,
    write_outputs,
)
from flashdeck.dataset import parse_dataset_script

GENERATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_collect_markdown_files_recurses_in_name_order(notes_repo):
    files = collect_markdown_files(notes_repo / "notes")
    assert [p.name for p in files] == ["advanced.md", "basics.md"]

    practice = collect_markdown_files(notes_repo / "practice")
    assert [p.name for p in practice] == ["intro.MD"]


def test_collect_markdown_files_missing_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        collect_markdown_files(tmp_path / "missing")


def test_build_dataset_orders_and_numbers_cards(notes_repo):
    result = build_dataset(notes_repo, ["notes", "practice"])

    assert [c["id"] for c in result.cards] == ["card-1", "card-2", "card-3", "card-4"]
    assert [c["source"] for c in result.cards] == [
        "notes/csharp/advanced.md",
        "notes/csharp/advanced.md",
        "notes/csharp/basics.md",
        "practice/intro.MD",
    ]
    assert result.cards[0]["isSection"] is True
    assert result.cards[1]["isConcept"] is True
    assert result.cards[1]["question"] == "Patterns"
    assert (result.qa_count, result.section_count, result.concept_count) == (2, 1, 1)
    assert result.by_category() == {"notes": 3, "practice": 1}


def test_build_dataset_delegate_card(notes_repo):
    result = build_dataset(notes_repo, ["notes", "practice"])
    delegate = result.cards[2]
    assert delegate == {
        "question": "What is a delegate?",
        "answer": [{"type": "text", "content": "A type-safe function pointer."}],
        "category": "notes",
        "topic": "csharp",
        "source": "notes/csharp/basics.md",
        "id": "card-3",
    }
    practice = result.cards[3]
    assert practice["question"] == "What does async do?"
    assert (practice["category"], practice["topic"]) == ("practice", "intro.MD")


def test_build_dataset_missing_source_fails(notes_repo):
    with pytest.raises(FileNotFoundError):
        build_dataset(notes_repo, ["notes", "missing"])


def test_render_dataset_script_header(notes_repo):
    result = build_dataset(notes_repo, ["notes", "practice"])
    script = render_dataset_script(result, GENERATED_AT)
    lines = script.splitlines()

    assert lines[0] == "// Auto-generated flash card data from notes/ and practice/ folders"
    assert lines[1] == "// Generated on: 2024-05-01T12:00:00+00:00"
    assert lines[2] == "// Total cards: 4 (2 Q&A, 1 sections, 1 concepts)"
    assert lines[4].startswith("window.FLASH_CARD_DATA = [")
    assert script.endswith("];\n")
    assert parse_dataset_script(script) == result.cards


def test_write_outputs(notes_repo, tmp_path):
    result = build_dataset(notes_repo, ["notes", "practice"])
    build_dir = tmp_path / "out" / "build"
    script_path = write_outputs(result, build_dir, GENERATED_AT)

    assert script_path == build_dir / "flash-card-data.js"
    assert script_path.read_text(encoding="utf-8") == render_dataset_script(result, GENERATED_AT)
    data = json.loads((build_dir / "flash-card-data.json").read_text(encoding="utf-8"))
    assert data == result.cards


def test_cli_build_success(notes_repo, monkeypatch):
    build_dir = notes_repo / "build"
    monkeypatch.setattr(cli, "REPO_ROOT", notes_repo)
    monkeypatch.setattr(cli, "CONTENT_SOURCES", ["notes", "practice"])
    monkeypatch.setattr(cli, "BUILD_DIR", build_dir)

    assert cli.main([]) == 0
    assert (build_dir / "flash-card-data.js").exists()
    assert len(json.loads((build_dir / "flash-card-data.json").read_text(encoding="utf-8"))) == 4


def test_cli_build_failure_exit_code(notes_repo, monkeypatch, capsys):
    monkeypatch.setattr(cli, "REPO_ROOT", notes_repo)
    monkeypatch.setattr(cli, "CONTENT_SOURCES", ["nope"])
    monkeypatch.setattr(cli, "BUILD_DIR", notes_repo / "build")

    assert cli.main([]) == 1
    assert "Build failed:" in capsys.readouterr().err
    assert not (notes_repo / "build").exists()
