"""Data models for validation results and errors."""
