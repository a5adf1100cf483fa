"""Utilities for CSS Admission."""
