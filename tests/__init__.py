"""
Test suite for branded indexing

Contains:
- tests/unit/          : Unit tests for individual modules
"""
