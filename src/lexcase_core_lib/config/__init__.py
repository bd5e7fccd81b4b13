"""Configuration Module

Environment-driven settings for the lifecycle engine.
"""

from .settings import EngineSettings, RulesSource

__all__ = [
    "EngineSettings",
    "RulesSource",
]
