"""Compactor package."""
