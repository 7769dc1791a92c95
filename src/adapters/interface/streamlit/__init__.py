"""Streamlit interface package."""

__all__ = []
