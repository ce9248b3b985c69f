"""Preset starting conditions."""

from .scenarios import GENERATED_KEY, SCENARIO_DEFINITIONS, SCENARIOS, Scenario, get_scenario

__all__ = ["GENERATED_KEY", "SCENARIO_DEFINITIONS", "SCENARIOS", "Scenario", "get_scenario"]
