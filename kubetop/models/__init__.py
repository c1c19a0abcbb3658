"""Data models for kubetop."""
