"""Session state for registered intake records.

This module keeps loaded file records, their selection state, and
user-facing notifications for the lifetime of one intake session.
"""
