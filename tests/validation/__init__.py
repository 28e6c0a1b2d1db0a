"""Unit tests for the symbolic_planning.validation package."""
