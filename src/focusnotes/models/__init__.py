"""Pydantic models for records and request payloads."""
