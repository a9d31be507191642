"""
Phase handlers for night, day, and voting phases.
"""

from .day_phase import DayPhaseHandler
from .night_phase import NightPhaseHandler
from .voting import VotingHandler

__all__ = ['DayPhaseHandler', 'NightPhaseHandler', 'VotingHandler']
