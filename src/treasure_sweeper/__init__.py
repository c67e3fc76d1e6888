"""
Treasure Sweeper: a Minesweeper variant with treasures, lives and scoring.
"""
__version__ = "0.1.0"
