"""Sample datasets shared by the test modules."""
