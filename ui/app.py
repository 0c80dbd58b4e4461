"""Bookmark Manager — Streamlit interface.

Run with:
    streamlit run ui/app.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure the project root is on sys.path so `ui.*` and `server.*` imports resolve
# regardless of the working directory Streamlit uses.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

st.set_page_config(
    page_title="Bookmark Manager",
    page_icon="📚",
    layout="wide",
)

from ui.components import bookmark_card, bookmark_form  # noqa: E402
from ui.state import BookmarkPageState  # noqa: E402

_GRID_COLUMNS = 3


def _get_state() -> BookmarkPageState:
    """Create the page state on first load and fetch the initial list."""
    if "page_state" not in st.session_state:
        state = BookmarkPageState()
        asyncio.run(state.load())
        st.session_state.page_state = state
    return st.session_state.page_state


@st.dialog("Add New Bookmark", width="large")
def _add_dialog(state: BookmarkPageState) -> None:
    st.caption("Add a new bookmark to your collection. Fill in the details below.")

    def _submit(data: dict) -> None:
        asyncio.run(state.add_bookmark(data))
        st.rerun()

    bookmark_form.render("add_form", _submit)


@st.dialog("Edit Bookmark", width="large")
def _edit_dialog(state: BookmarkPageState, bookmark: dict) -> None:
    st.caption("Make changes to your bookmark here. Click save when you're done.")

    def _submit(data: dict) -> None:
        asyncio.run(state.edit_bookmark(bookmark["id"], data))
        st.rerun()

    bookmark_form.render(
        f"edit_form_{bookmark['id']}",
        _submit,
        initial=bookmark,
        submit_label="Save Changes",
    )


def _clear_tag(state: BookmarkPageState) -> None:
    asyncio.run(state.click_tag(state.active_tag))
    st.session_state["search_query"] = ""


def _render_toolbar(state: BookmarkPageState) -> None:
    col_search, col_add = st.columns([5, 1])
    with col_search:
        st.text_input(
            "Search",
            key="search_query",
            placeholder="Search by title or URL...",
            label_visibility="collapsed",
        )
        state.set_search_query(st.session_state.get("search_query", ""))
    with col_add:
        if st.button("+ Add Bookmark", type="primary", use_container_width=True):
            state.toggle_add_form()

    if state.active_tag:
        col_label, col_clear = st.columns([5, 1])
        col_label.markdown(f"Filtered by: `#{state.active_tag}`")
        col_clear.button("Clear filter", on_click=_clear_tag, args=(state,))


def _render_grid(state: BookmarkPageState) -> None:
    visible = state.filtered_bookmarks
    if not visible:
        if state.search_query or state.active_tag:
            st.info("No bookmarks found matching your criteria")
        else:
            st.info("No bookmarks yet. Add your first one!")
        return

    cols = st.columns(_GRID_COLUMNS)
    for i, bookmark in enumerate(visible):
        with cols[i % _GRID_COLUMNS]:
            bookmark_card.render(bookmark, state)


def main() -> None:
    state = _get_state()

    st.title("📚 Bookmark Manager")
    st.write("Organize and manage your favorite links")

    _render_toolbar(state)

    if state.error:
        st.error(state.error)

    if state.loading:
        with st.spinner("Loading bookmarks..."):
            asyncio.run(state.reload())

    _render_grid(state)

    if state.show_add_form:
        state.show_add_form = False
        _add_dialog(state)
    elif state.editing:
        bookmark = state.editing
        state.stop_editing()
        _edit_dialog(state, bookmark)


main()
