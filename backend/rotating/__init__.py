"""Rotation timestamp resource: compute, decompose and replace, never update."""
