"""Utility helpers: quantity parsing, deadlines, logging and rendering."""
