"""
Test suite for page-digest.

Provides tests for all modules:
- Unit tests for the quality filter, locator, traversal and finishing stages
- End-to-end extraction scenarios
- Fixtures for common test pages
"""
