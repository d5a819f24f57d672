"""Cron-style task scheduling with second resolution."""

__version__ = "0.1.0"
__all__ = ["clock", "cron", "data", "queue", "randomization", "schedule", "task"]