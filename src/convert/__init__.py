"""Scanner report conversion.

This module routes raw uploads to format-specific transformers and
returns normalized executions for the intake orchestrator.
"""
