"""Shared signal-processing helpers."""
