"""Unit tests for the symbolic_planning.search package."""
