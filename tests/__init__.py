"""
Index Chart Test Suite

This package contains unit tests and fixtures for the Index Chart package.

Run tests with:
    pytest tests/
    pytest tests/test_aggregation.py -v
    pytest tests/test_aggregation.py::TestUnweightedAggregation -v
"""
