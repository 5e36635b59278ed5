"""Data models for mkvsame."""
