"""Compactor core modules."""
