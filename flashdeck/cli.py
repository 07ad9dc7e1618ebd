"""Command line entry point: ``flashdeck-build``.

Regenerates the flash card dataset from the configured note folders. Paths
are taken from the FLASHDECK_* environment variables (see `flashdeck.config`).
"""

import argparse
import logging
import sys
from typing import List, Optional

from .builder import build_dataset, write_outputs
from .config import BUILD_DIR, CONTENT_SOURCES, REPO_ROOT

logger = logging.getLogger("flashdeck")


def run_build() -> None:
    logger.info("Generating flash card data from %s", ", ".join(CONTENT_SOURCES))
    result = build_dataset(REPO_ROOT, CONTENT_SOURCES)
    output = write_outputs(result, BUILD_DIR)

    logger.info(
        "Generated %d flash cards: %d Q&A pairs, %d detailed sections, %d concept/code examples",
        len(result.cards),
        result.qa_count,
        result.section_count,
        result.concept_count,
    )
    logger.info("Output: %s", output)
    for category, count in result.by_category().items():
        logger.info("  %s: %d cards", category, count)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flashdeck-build",
        description="Generate the flash card dataset from Markdown notes.",
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        run_build()
    except Exception as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
