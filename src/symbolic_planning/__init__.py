"""Lifted planning problems, their grounding, and forward search over the ground state space."""
