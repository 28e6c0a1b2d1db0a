"""Unit tests for the symbolic_planning.pddl package."""
