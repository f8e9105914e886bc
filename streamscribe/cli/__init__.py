"""Command-line entry point for inspecting and editing configuration files."""
