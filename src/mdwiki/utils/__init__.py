"""Text, Hangul and file helpers."""
