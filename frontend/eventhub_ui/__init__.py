"""EventHub browser UI (Streamlit)."""
