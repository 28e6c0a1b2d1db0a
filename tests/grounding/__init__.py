"""Unit tests for the symbolic_planning.grounding package."""
