"""Core Application Layer: Orchestrates command execution.

Connects the CLI entry point with the music API client through interfaces.
"""
