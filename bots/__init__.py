"""Bot strategies for Wizard."""

from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

__all__ = ["GreedyBot", "RandomBot"]
