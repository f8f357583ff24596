"""Pydantic request/response schemas for the household API."""
