"""Unit tests for the symbolic_planning package."""
