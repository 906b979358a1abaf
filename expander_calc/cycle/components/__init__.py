"""Cycle component models."""
