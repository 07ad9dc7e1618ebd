import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .config import (
    BUILD_DIR,
    CONTENT_SOURCES,
    DATA_JSON_NAME,
    DATA_SCRIPT_NAME,
    DATA_VARIABLE,
    REPO_ROOT,
)
from .extractor import ExtractedCards, extract_cards, source_info
from .models import Card

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    cards: List[Card] = field(default_factory=list)
    qa_count: int = 0
    section_count: int = 0
    concept_count: int = 0
    sources: List[str] = field(default_factory=list)

    def by_category(self) -> Dict[str, int]:
        counts = Counter(card["category"] for card in self.cards)
        return dict(counts.most_common())


def collect_markdown_files(base_dir: Union[str, Path]) -> List[Path]:
    """Recursively list Markdown files under a directory.

    Entries are visited in name order and subdirectories are walked where
    they appear, so the result is stable across runs.

    Args:
        base_dir: Root folder to scan.

    Returns:
        list[pathlib.Path]: Files whose name ends in '.md' (any case).

    Raises:
        FileNotFoundError: If `base_dir` does not exist.
        NotADirectoryError: If `base_dir` is a file.
    """
    files: List[Path] = []
    for entry in sorted(Path(base_dir).iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            files.extend(collect_markdown_files(entry))
        elif entry.is_file() and entry.name.lower().endswith(".md"):
            files.append(entry)
    return files


def extract_file(path: Path, repo_root: Union[str, Path] = REPO_ROOT) -> ExtractedCards:
    """Run the three extraction passes over one Markdown file."""
    text = path.read_text(encoding="utf-8")
    return extract_cards(text, source_info(path, repo_root))


def build_dataset(repo_root: Union[str, Path] = REPO_ROOT,
                  sources: Iterable[str] = CONTENT_SOURCES) -> BuildResult:
    """Extract cards from every Markdown file under the configured roots.

    Cards are ordered by file (roots in the given order, then name order),
    then by pass (Q&A, sections, concepts), then by position in the file.
    Ids ``card-1``..``card-N`` are assigned once everything is collected.

    Args:
        repo_root: Folder that contains the source roots. Card `source`
            paths are relative to it.
        sources: Names of the root folders, e.g. ``["notes", "practice"]``.

    Returns:
        BuildResult: The cards plus per-pass counts.

    Raises:
        OSError: If a root folder is missing or unreadable.
    """
    repo_root = Path(repo_root)
    result = BuildResult(sources=list(sources))

    for key in result.sources:
        files = collect_markdown_files(repo_root / key)
        logger.info("Found %d markdown files in %s/", len(files), key)
        for path in files:
            extracted = extract_file(path, repo_root)
            result.qa_count += len(extracted.qa)
            result.section_count += len(extracted.sections)
            result.concept_count += len(extracted.concepts)
            result.cards.extend(extracted.combined())

    for index, card in enumerate(result.cards, start=1):
        card["id"] = f"card-{index}"

    return result


def render_dataset_script(result: BuildResult, generated_at: Optional[datetime] = None) -> str:
    """Render the bundled dataset as a script assigning a global array.

    Args:
        result: Output of `build_dataset`.
        generated_at: Timestamp for the header; defaults to now (UTC).

    Returns:
        str: Script text, e.g.::

            // Auto-generated flash card data from notes/ and practice/ folders
            // Generated on: 2024-01-01T00:00:00+00:00
            // Total cards: 3 (1 Q&A, 1 sections, 1 concepts)

            window.FLASH_CARD_DATA = [...];
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    folders = " and ".join(f"{name}/" for name in result.sources)
    body = json.dumps(result.cards, ensure_ascii=False, indent=2)
    return (
        f"// Auto-generated flash card data from {folders} folders\n"
        f"// Generated on: {generated_at.isoformat()}\n"
        f"// Total cards: {len(result.cards)} ({result.qa_count} Q&A, "
        f"{result.section_count} sections, {result.concept_count} concepts)\n"
        f"\n"
        f"{DATA_VARIABLE} = {body};\n"
    )


def write_outputs(result: BuildResult, build_dir: Union[str, Path] = BUILD_DIR,
                  generated_at: Optional[datetime] = None) -> Path:
    """Write the bundled script and the plain JSON copy of the dataset.

    Args:
        result: Output of `build_dataset`.
        build_dir: Destination folder, created if needed.
        generated_at: Timestamp for the script header.

    Returns:
        pathlib.Path: Path of the written script file.
    """
    build_dir = Path(build_dir)
    build_dir.mkdir(parents=True, exist_ok=True)

    script_path = build_dir / DATA_SCRIPT_NAME
    json_path = build_dir / DATA_JSON_NAME

    script_path.write_text(render_dataset_script(result, generated_at), encoding="utf-8")
    json_path.write_text(json.dumps(result.cards, ensure_ascii=False, indent=2), encoding="utf-8")
    return script_path
