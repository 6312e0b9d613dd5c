"""Report format detection.

This module recognizes normalized content and guesses scanner formats
from JSON fingerprints before any conversion is attempted.
"""
