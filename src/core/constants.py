"""Core constants used across intake modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_MAX_CONCURRENT_LOADS = 8
DEFAULT_TEXT_ENCODING = "utf-8"
NO_FINGERPRINT_MATCH_MESSAGE = "Invalid file uploaded, no fingerprints matched."
UNRECOGNIZED_HDF_MESSAGE = "Couldn't parse data. See developer's tools for more details."
EXEC_JSON_SCHEMA_KEY = "1_0_ExecJson"
PROFILE_JSON_SCHEMA_KEY = "1_0_ProfileJson"
TRANSFORMER_PLUGIN_FUNCTION = "register_transformers"
TRANSFORMER_PLUGIN_MODULE_NAME = "hdf_intake_user_transformers"
SUPPORTED_MANIFEST_VERSION = 1
