"""Serialization module — export sessions to JSON-compatible views."""

from session_engine.serialization.records import to_session_dict, to_session_json_string

__all__ = ["to_session_dict", "to_session_json_string"]
