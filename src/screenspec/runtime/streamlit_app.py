"""
Specification-driven form application.

Loads a bundle and renders whichever screen is active, with no
screen-specific code: a new bundle with completely different screens,
rules and transitions works without any code change.

Usage:
    streamlit run src/screenspec/runtime/streamlit_app.py
    SCREENSPEC_BUNDLE_DIR=path/to/bundle streamlit run src/screenspec/runtime/streamlit_app.py
"""

import streamlit as st

from screenspec.runtime.document_loader import DocumentLoadError, load_bundle
from screenspec.runtime.session import InterpreterSession
from screenspec.runtime.widget_factory import render_screen
from screenspec.startup import ensure_initialized

# Page configuration
st.set_page_config(page_title="screenspec", layout="centered")

settings = ensure_initialized().settings

# Sidebar: bundle selection
st.sidebar.header("Bundle")
bundle_path = st.sidebar.text_input("Bundle directory", value=str(settings.bundle_dir))

if st.sidebar.button("Load bundle") or "session" not in st.session_state:
    try:
        bundle = load_bundle(bundle_path, settings)
        st.session_state.session = InterpreterSession(bundle.document, assets=bundle.assets)
        st.sidebar.success(f"Loaded {len(bundle.document.screens)} screens")
    except DocumentLoadError as e:
        st.session_state.pop("session", None)
        st.sidebar.error(f"Error loading bundle: {e}")

if "session" not in st.session_state:
    st.info("Load a bundle using the sidebar.")
    st.stop()

session: InterpreterSession = st.session_state.session

if st.sidebar.button("Restart"):
    session.reset()

render_screen(session.snapshot(), session)

with st.sidebar.expander("State (debug)"):
    st.write(f"Active screen: `{session.active_screen_id}`")
    st.json({"values": session.values, "errors": session.errors})
