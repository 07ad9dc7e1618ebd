"""flashdeck: turn Markdown study notes into a flash card slideshow."""

from .builder import BuildResult, build_dataset, collect_markdown_files, write_outputs
from .dataset import CardStore, DatasetUnavailableError, load_dataset
from .extractor import extract_concepts, extract_qa, extract_sections, source_info
from .markdown import clean_markdown
from .presenter import SlideState, Slideshow, shuffle

__version__ = "1.0.0"

__all__ = [
    "BuildResult",
    "CardStore",
    "DatasetUnavailableError",
    "SlideState",
    "Slideshow",
    "build_dataset",
    "clean_markdown",
    "collect_markdown_files",
    "extract_concepts",
    "extract_qa",
    "extract_sections",
    "load_dataset",
    "shuffle",
    "source_info",
    "write_outputs",
]
