"""Metamorphosis exception hierarchy.

Centralised base classes so degraded inputs (camera, assets) can be caught
narrowly by the host loop while programming errors still propagate.
"""


class MetamorphosisError(Exception):
    """Root of all scene domain exceptions."""


class SimulationError(MetamorphosisError):
    """Errors during simulation execution (clock, systems, entities)."""


class LifecycleError(SimulationError):
    """A cocoon or butterfly lifecycle invariant was violated."""


class SensorError(MetamorphosisError):
    """The light sensor could not produce a frame."""


class AssetError(MetamorphosisError):
    """An image asset could not be loaded."""


class ConfigurationError(MetamorphosisError):
    """Invalid or missing configuration."""
