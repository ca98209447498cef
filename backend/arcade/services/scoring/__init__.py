"""Scoring domain services: outcome codec and per-game reconciliation.

Pure(ish) logic imported by the session controllers and HTTP routes,
keeping transport concerns separated from how a play-through becomes a
stored score.
"""
