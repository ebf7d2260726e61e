"""
Test package for the DailyTracker application.

This package contains comprehensive tests for all components of the DailyTracker
system.

Test Organization:
    unit/: Unit tests for individual components and functions
    conftest.py: Pytest configuration and shared fixtures
"""
