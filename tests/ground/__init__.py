"""Unit tests for the symbolic_planning.ground package."""
