"""Single bookmark card: link, description, tags and actions."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any

import streamlit as st

from ui.state import BookmarkPageState


def format_created(created_at: str) -> str:
    """Render an ISO-8601 timestamp as a short date, or pass it through."""
    try:
        return datetime.fromisoformat(created_at.replace("Z", "+00:00")).strftime(
            "%b %d, %Y"
        )
    except ValueError:
        return created_at


def _on_tag_click(state: BookmarkPageState, tag: str) -> None:
    asyncio.run(state.click_tag(tag))
    st.session_state["search_query"] = ""


def _on_delete(state: BookmarkPageState, bookmark_id: str) -> None:
    asyncio.run(state.delete_bookmark(bookmark_id))


def render(bookmark: dict[str, Any], state: BookmarkPageState) -> None:
    """Render one bookmark inside a bordered container."""
    bid = bookmark["id"]
    with st.container(border=True):
        st.markdown(f"**[{bookmark['title']}]({bookmark['url']})**")
        st.caption(bookmark["url"])
        if bookmark.get("description"):
            st.write(bookmark["description"])

        tags = bookmark.get("tags") or []
        if tags:
            cols = st.columns(len(tags))
            for i, tag in enumerate(tags):
                cols[i].button(
                    f"#{tag}",
                    key=f"tag_{bid}_{i}",
                    type="primary" if tag == state.active_tag else "secondary",
                    on_click=_on_tag_click,
                    args=(state, tag),
                )

        st.caption(f"Added {format_created(bookmark.get('createdAt', ''))}")

        col_edit, col_delete = st.columns(2)
        col_edit.button(
            "✏️ Edit",
            key=f"edit_{bid}",
            use_container_width=True,
            on_click=state.start_editing,
            args=(bookmark,),
        )
        col_delete.button(
            "🗑️ Delete",
            key=f"delete_{bid}",
            use_container_width=True,
            on_click=_on_delete,
            args=(state, bid),
        )
