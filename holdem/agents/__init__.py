"""
Agents - decision makers for non-human seats.

This module provides the base agent interface and the heuristic AI policy
used by the table's computer opponents.
"""

from holdem.agents.base import BaseAgent, Decision, DecisionContext
from holdem.agents.heuristic import AIPolicy, DifficultyProfile, PROFILES

__all__ = ["BaseAgent", "Decision", "DecisionContext", "AIPolicy", "DifficultyProfile", "PROFILES"]
