"""Unit tests for the symbolic_planning.lifted package."""
