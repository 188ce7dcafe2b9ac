"""
Widget Factory - paints a ViewSnapshot with Streamlit.

Thin mapping from component variant to visual primitive; no form logic
lives here. Edits and clicks are forwarded to the InterpreterSession through
widget callbacks, which Streamlit runs before the next rerun.

Type Mappings:
- image -> st.image()
- text_field -> st.text_input() (masked for data_type=password) + error caption
- button -> st.button()
- text -> st.markdown() sized by text_variant
- spacer -> fixed-height gap
- table -> st.table()
- anything else -> "unsupported component" notice
"""

import base64
import binascii
import html
from typing import Any, Dict, List, Optional

import streamlit as st

from screenspec.runtime.session import InterpreterSession
from screenspec.schemas.view import ComponentView, ViewSnapshot

UNSUPPORTED_MESSAGE = "Componente no soportado: {type}"


class WidgetFactory:
    """Factory for Streamlit widgets based on component views."""

    @staticmethod
    def _font_size(text_variant: Optional[str]) -> int:
        """Pixel size for a text variant."""
        if text_variant == "title_large":
            return 20
        if text_variant == "body_small":
            return 12
        return 14

    @staticmethod
    def _button_type(style: Optional[str]) -> str:
        """Streamlit button type for a button style."""
        if style == "primary":
            return "primary"
        if style == "text":
            return "tertiary"
        return "secondary"

    @staticmethod
    def _image_width(size: Optional[str]) -> Optional[int]:
        """Fixed width for sized images, None to fill the container."""
        return 150 if size == "md" else None

    @staticmethod
    def _decode_data_uri(src: str) -> Optional[bytes]:
        """Raw bytes of a base64 data URI, or None if it is not decodable."""
        if not src or "," not in src:
            return None
        try:
            return base64.b64decode(src.split(",", 1)[1], validate=True)
        except (binascii.Error, ValueError):
            return None

    @staticmethod
    def _table_rows(props: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Rows keyed by column title, in column order."""
        columns = props.get("columns") or []
        rows = props.get("rows") or []
        if not columns:
            return rows
        return [
            {column.get("title", column.get("id")): row.get(column.get("id")) for column in columns}
            for row in rows
        ]

    @staticmethod
    def widget_key(screen_id: str, component_id: str) -> str:
        """Widget keys are per screen so that state never leaks across screens."""
        return f"{screen_id}:{component_id}"

    @staticmethod
    def create_widget(view: ComponentView, screen_id: str, session: InterpreterSession) -> None:
        """
        Paint one component.

        Args:
            view: Resolved component view from the session snapshot
            screen_id: Screen the component belongs to
            session: Session receiving edits and clicks
        """
        props = view.props
        key = WidgetFactory.widget_key(screen_id, view.id)

        if view.type == "image":
            data = WidgetFactory._decode_data_uri(view.src or "")
            if data is None:
                # Unresolved asset renders as an absent image
                st.empty()
                return
            st.image(data, caption=None, width=WidgetFactory._image_width(props.get("size")))

        elif view.type == "text_field":
            is_password = props.get("data_type") == "password"
            label = props.get("label") or ""
            if props.get("required"):
                label = f"{label} *"
            # The session owns field values; widget state mirrors the snapshot.
            st.session_state[key] = view.value or ""
            st.text_input(
                label,
                key=key,
                type="password" if is_password else "default",
                placeholder=props.get("placeholder"),
                on_change=_on_text_change,
                args=(session, screen_id, view.id, key),
            )
            if view.error:
                st.caption(f":red[{view.error}]")

        elif view.type == "button":
            st.button(
                props.get("text") or view.id,
                key=key,
                type=WidgetFactory._button_type(props.get("style")),
                use_container_width=props.get("width") == "full",
                on_click=_on_click,
                args=(session, screen_id, view.id),
            )

        elif view.type == "text":
            size = WidgetFactory._font_size(props.get("text_variant"))
            align = props.get("align") or "left"
            st.markdown(
                f"<p style='text-align:{align};font-size:{size}px'>{html.escape(view.text or '')}</p>",
                unsafe_allow_html=True,
            )

        elif view.type == "spacer":
            height = props.get("height") or 8
            st.markdown(f"<div style='height:{height}px'></div>", unsafe_allow_html=True)

        elif view.type == "table":
            st.table(WidgetFactory._table_rows(props))

        else:
            st.warning(UNSUPPORTED_MESSAGE.format(type=view.type))


def _on_text_change(session: InterpreterSession, screen_id: str, field_id: str, key: str) -> None:
    session.input_change(screen_id, field_id, st.session_state.get(key, ""))


def _on_click(session: InterpreterSession, screen_id: str, button_id: str) -> None:
    session.button_click(screen_id, button_id)


def render_screen(snapshot: ViewSnapshot, session: InterpreterSession) -> None:
    """
    Paint the active screen.

    Vertical layouts stack components; horizontal layouts give each
    component its own column.
    """
    if snapshot.title:
        st.title(snapshot.title)

    if snapshot.layout.get("type") == "horizontal" and snapshot.components:
        columns = st.columns(len(snapshot.components))
        for column, view in zip(columns, snapshot.components):
            with column:
                WidgetFactory.create_widget(view, snapshot.screen_id, session)
        return

    for view in snapshot.components:
        WidgetFactory.create_widget(view, snapshot.screen_id, session)
