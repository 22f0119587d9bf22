"""Roster snapshot contract and I/O."""
