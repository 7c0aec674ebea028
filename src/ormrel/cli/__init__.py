"""
CLI module for ormrel.
"""

from ormrel.cli.main import cli, diagrams, generate, info, logs, show_logs

__all__ = ["cli", "diagrams", "generate", "info", "logs", "show_logs"]
