"""Define fixtures shared by the unit tests."""
