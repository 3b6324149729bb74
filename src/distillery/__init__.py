"""Distillery: distill pull-request diffs into reviewable narratives."""

__version__ = "0.1.0"
