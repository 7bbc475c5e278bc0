"""Resource limit constants and fixed names for JSON/model conversion."""

DEFAULT_MAX_DEPTH = 100
"""Maximum nesting depth for decode, encode and parsed text (CWE-674 prevention)."""

DEFAULT_INDENT = 2
"""Indentation used by pretty serialization."""

MAX_SNIPPET_LENGTH = 2000
"""Maximum length of the JSON snippet embedded in error descriptions."""

ROOT_PATH = "$"
"""Path of the top-level JSON value."""

ARRAY_KEY = "items"
"""Key under which a top-level array is presented as an object."""

JSON_KEY_METADATA = "json_key"
"""Dataclass field metadata entry overriding the JSON key."""
