"""Normalized record handling.

This module recognizes supported normalized schema versions and builds
frozen, contextualized views of execution and profile documents.
"""
