"""
Habit Journal - weekly habit tracking with a derived XP / level / streak signal
"""

__version__ = "5.0.0"
