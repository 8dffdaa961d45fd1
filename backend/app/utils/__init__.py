"""Utility modules for the application.

This package contains shared utility functions and classes.
"""
