"""Scene system base classes.

Concrete systems live beside the state they own:

- metamorphosis.light_sensor.LightSensor (SENSE)
- metamorphosis.environment.EnvironmentClock (TIME_UPDATE)
- metamorphosis.cocoons.CocoonLifecycleSystem (LIFECYCLE)
- metamorphosis.attractors.AttractorField (ATTRACTORS)
- metamorphosis.flocking.FlockingSystem (ENTITY_ACT)
"""

from metamorphosis.systems.base import BaseSystem, System, SystemResult

__all__ = ["BaseSystem", "System", "SystemResult"]
