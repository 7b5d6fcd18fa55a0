"""Serialization module — export decision records to the consultation JSON contract."""

from program_engine.serialization.consultation import (
    consultation_to_json,
    to_consultation_json,
    to_consultation_json_string,
)

__all__ = ["consultation_to_json", "to_consultation_json", "to_consultation_json_string"]
