"""
Test suite for rational-engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
