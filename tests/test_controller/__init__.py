"""
Controller Tests

Tests for hall call scoring, the dispatcher and the threaded runtime.
"""
