"""Shared containers, parameter models and constants."""
