"""Unit tests for the symbolic_planning.io package."""
