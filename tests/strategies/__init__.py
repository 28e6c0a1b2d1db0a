"""Define strategies for property-based testing."""
