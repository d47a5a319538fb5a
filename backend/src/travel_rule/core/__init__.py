"""Requirement extraction, field matching and status classification."""
