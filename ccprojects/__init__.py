"""Time spent per project in Claude Code, split between you and AI sub-agents."""

__version__ = "0.1.0"
