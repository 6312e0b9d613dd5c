"""Report intake pipeline.

This module reads uploads, routes them through detection and conversion,
and registers the resulting normalized records into session state.
"""
