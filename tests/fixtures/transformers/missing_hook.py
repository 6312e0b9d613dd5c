"""Transformer plugin without a registration hook."""

TRANSFORMERS = {}
