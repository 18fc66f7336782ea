"""Streamlit front end for DICSpec."""
