"""
trafficsim: simulation core
============================

Modules
-------
types
    :class:`Direction`, :class:`Axis`, :class:`LightState` and the other
    enumerations shared by every module.
policy
    :class:`SimulationPolicy` tunable parameters and validation.
geometry
    :class:`Geometry` borders, lanes, stop lines and background glyphs.
lights
    :class:`TrafficLight` per-axis countdown state machine.
registry
    :class:`CarRegistry` fixed-capacity pool of car slots.
movement
    :class:`MovementEngine` per-tick advance of every active car.
events
    Render events, light snapshots and the render diff.
simulation
    :class:`Simulation` aggregate and tick clock.
"""

from .types import Axis, ColorClass, Direction, LightState, StepOutcome
from .policy import ConfigurationError, SimulationPolicy
from .geometry import Geometry
from .lights import TrafficLight
from .registry import Car, CarRegistry
from .movement import CarStep, MovementEngine
from .events import LightSnapshot, RenderEvent, Stats, TickResult, render_events
from .simulation import Simulation

__all__ = [
    "Axis",
    "ColorClass",
    "Direction",
    "LightState",
    "StepOutcome",
    "ConfigurationError",
    "SimulationPolicy",
    "Geometry",
    "TrafficLight",
    "Car",
    "CarRegistry",
    "CarStep",
    "MovementEngine",
    "LightSnapshot",
    "RenderEvent",
    "Stats",
    "TickResult",
    "render_events",
    "Simulation",
]
