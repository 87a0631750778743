"""Core Layer: application logic that drives the repositories (CLI command handling)."""
