"""flashdeck Streamlit app.

This module provides a Streamlit UI that cycles through the generated flash
cards as a timed slideshow, and a small page to regenerate the dataset.

Key features:
  * Slideshow: one card at a time, fading between cards, reshuffled every
    full cycle.
  * Build: rerun the Markdown extraction and show counts per card kind and
    per category.

Environment variables: see `flashdeck.config` (FLASHDECK_*).
Run with ``streamlit run streamlit_app.py``.
"""

from __future__ import annotations

from functools import partial

import streamlit as st

from flashdeck.builder import build_dataset, write_outputs
from flashdeck.config import BUILD_DIR, CONTENT_SOURCES, DATA_SCRIPT_NAME, DATA_URL, REPO_ROOT
from flashdeck.dataset import load_dataset
from flashdeck.presenter import SlideState, Slideshow
from flashdeck.render import SLIDE_CSS, render_card_html, render_error_html


# --- Streamlit page config

st.set_page_config(page_title="flashdeck", layout="wide")


def render_slide(placeholder, show: Slideshow) -> None:
    """Draw the slideshow's current state into a Streamlit placeholder.

    Card HTML is escaped by `render_card_html`, so passing it with
    `unsafe_allow_html` cannot inject markup from note content.
    """
    if show.state == SlideState.ERROR:
        html = render_error_html()
    elif show.current is None:
        html = '<div class="flash-card-container visible">Loading flash cards…</div>'
    else:
        html = render_card_html(show.current, visible=show.visible)
    placeholder.markdown(SLIDE_CSS + html, unsafe_allow_html=True)


def render_build_tab() -> None:
    """Render the 'Build' tab.

    Regenerates the dataset files from the configured note folders and
    reports what was extracted.
    """
    st.header("Generate Flash Cards")
    st.write(f"Sources: {', '.join(f'{REPO_ROOT / s}' for s in CONTENT_SOURCES)}")
    st.write(f"Output: {BUILD_DIR}")

    if st.button("Rebuild dataset"):
        try:
            result = build_dataset(REPO_ROOT, CONTENT_SOURCES)
        except OSError as exc:
            st.error(f"Build failed: {exc}")
            return
        output = write_outputs(result, BUILD_DIR)
        st.success(
            f"✅ Generated {len(result.cards)} flash cards "
            f"({result.qa_count} Q&A, {result.section_count} sections, "
            f"{result.concept_count} concepts) to {output.name}"
        )
        st.subheader("Cards by category")
        st.table([{"category": c, "cards": n} for c, n in result.by_category().items()])


def render_slideshow_tab() -> None:
    """Render the 'Slideshow' tab.

    Blocks while the slideshow runs; any widget interaction reruns the
    script and restarts it with a freshly loaded dataset.
    """
    placeholder = st.empty()
    show = Slideshow()
    loader = partial(load_dataset, DATA_URL, BUILD_DIR / DATA_SCRIPT_NAME)
    render_slide(placeholder, show)
    show.run(loader, partial(render_slide, placeholder))
    if show.state == SlideState.ERROR:
        st.caption(show.error or "")


def main() -> None:
    """Entry point for the Streamlit UI."""
    tab1, tab2 = st.tabs(["🎴 Slideshow", "🛠️ Build"])

    with tab2:
        render_build_tab()

    with tab1:
        render_slideshow_tab()


# Run the app
main()
