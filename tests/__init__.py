"""Test suite for the elevator dispatch core"""
