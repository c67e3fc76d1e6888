"""
Treasure Sweeper agents module.

Provides agents that play through the Gymnasium environment:
- RandomAgent: Baseline random selection
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
]
