"""
Servomap Data Models

Robot descriptors, controller nodes and the per-mode configuration variants.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple, Union


# Sentinel group value meaning "not yet chosen"
GROUP_CHOICE = "choice"

INVERT_YES = "Yes"
INVERT_NO = "No"
INVERT_VALUES = (INVERT_YES, INVERT_NO)


class ControlMode(Enum):
    """Behavior family bound to a controller node."""
    UNSET = "Unset"      # Node registered, no mode chosen yet
    LINEAR = "Linear"    # Continuous proportional control of a group
    PRESET = "Preset"    # Discrete selection among named items

    @classmethod
    def from_label(cls, label: Union[str, "ControlMode"]) -> "ControlMode":
        """
        Parse a mode label as shown in choice widgets ("Linear", "preset", ...).

        Raises:
            ValueError: If the label names no mode
        """
        if isinstance(label, cls):
            return label
        for mode in cls:
            if mode.value.lower() == str(label).strip().lower():
                return mode
        raise ValueError(f"Unknown control mode: {label!r}")


@dataclass
class LinearConfig:
    """
    Linear mode settings.

    Attributes:
        group: Servo group driven by the node, GROUP_CHOICE until chosen
        invert: "Yes" or "No"
    """
    group: str = GROUP_CHOICE
    invert: str = INVERT_YES

    mode = ControlMode.LINEAR

    def is_complete(self) -> bool:
        """Check that every field holds a usable value."""
        return (
            isinstance(self.group, str) and bool(self.group) and
            self.invert in INVERT_VALUES
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode.value, "group": self.group, "invert": self.invert}


@dataclass
class PresetConfig:
    """
    Preset mode settings.

    Attributes:
        items: Selected item name -> value (None until a value is assigned)
    """
    items: Dict[str, Any] = field(default_factory=dict)

    mode = ControlMode.PRESET

    def is_complete(self) -> bool:
        """A preset is complete once at least one item has been selected."""
        return isinstance(self.items, dict) and len(self.items) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode.value, "items": dict(self.items)}


ModeConfig = Union[LinearConfig, PresetConfig]


def default_config(mode: ControlMode) -> ModeConfig:
    """
    Create a freshly defaulted configuration for a mode.

    Raises:
        ValueError: For ControlMode.UNSET, which has no configuration
    """
    if mode == ControlMode.LINEAR:
        return LinearConfig()
    if mode == ControlMode.PRESET:
        return PresetConfig()
    raise ValueError(f"Mode {mode.value} has no configuration")


@dataclass
class ControllerNode:
    """
    A named controller input and the behavior bound to it.

    Attributes:
        name: Unique node name within a profile (e.g. "axis1")
        config: Active mode configuration, None while the mode is unset
    """
    name: str
    config: Optional[ModeConfig] = None

    @property
    def mode(self) -> ControlMode:
        if self.config is None:
            return ControlMode.UNSET
        return self.config.mode

    def to_dict(self) -> Dict[str, Any]:
        if self.config is None:
            return {}
        return self.config.to_dict()

    def __repr__(self) -> str:
        return f"ControllerNode(name={self.name}, mode={self.mode.value})"


@dataclass(frozen=True)
class ServoDescriptor:
    """
    A servo as listed in a robot descriptor file.

    Attributes:
        name: Servo name, unique within its robot
        groups: Groups the servo belongs to, in file order
    """
    name: str
    groups: Tuple[str, ...] = ()


class RobotDescriptor(Mapping):
    """
    Read-only mapping of servo name -> ServoDescriptor for one robot.
    """

    def __init__(self, robot_id: str, servos: Dict[str, ServoDescriptor]):
        self.robot_id = robot_id
        self._servos = dict(servos)

    def __getitem__(self, name: str) -> ServoDescriptor:
        return self._servos[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._servos)

    def __len__(self) -> int:
        return len(self._servos)

    @property
    def servo_names(self) -> Tuple[str, ...]:
        """Servo names in file order."""
        return tuple(self._servos)

    def __repr__(self) -> str:
        return f"RobotDescriptor(robot_id={self.robot_id}, servos={len(self)})"
