"""Contain the simulators and forecasters of the days of activities.

The module is splitted in different submodules which each provide
different implementations for different parts of the simulation.
"""
from __future__ import annotations
