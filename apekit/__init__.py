"""Compile TOML API component definitions and OpenAPI schemas into validated component models."""

__version__ = "0.1.8"