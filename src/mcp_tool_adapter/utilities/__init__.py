"""Utilities shared across the MCP tool adapter."""
