"""Encoding and validation helpers for srkit."""
