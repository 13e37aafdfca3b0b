"""
Servomap - Controller-to-Servo Profile Configuration

A library for composing control profiles that bind controller inputs
(joystick axes, buttons) to behaviors driving the servos of a robot.

Key Features:
    - Robot descriptor lookup and servo group indexing
    - Per-node mode state machine (Linear / Preset) that keeps complete
      settings on reselect and discards stale ones on mode switch
    - Preset selection with retraction of the previously selected item
    - Servo table builder for enumerating a robot's servos

Basic Usage:
    from servomap import ControlProfile

    profile = ControlProfile()
    profile.use_controller("xbox")
    profile.use_robot("hexapod")

    profile.select_mode("left_x", "Linear")
    profile.set_linear_group("left_x", "legs")

    profile.select_mode("a", "Preset")
    profile.select_preset_item("a", "servo3")

    profile.to_dict()

Environment Variables:
    SERVOMAP_CONFIG_DIR          - Configuration root (default ~/.servomap)
    SERVOMAP_DEFAULT_ROBOT       - Default robot identifier
    SERVOMAP_DEFAULT_CONTROLLER  - Default controller identifier
"""

__version__ = "0.1.0"

# Core models
from .models import (
    ControlMode,
    ControllerNode,
    LinearConfig,
    PresetConfig,
    ModeConfig,
    ServoDescriptor,
    RobotDescriptor,
    GROUP_CHOICE,
    default_config,
)

# Configuration
from .config import (
    ServomapConfig,
    get_config,
    set_config,
    reset_config,
    ENV_CONFIG_DIR,
    ENV_DEFAULT_ROBOT,
    ENV_DEFAULT_CONTROLLER,
)

# Exceptions
from .exceptions import (
    ServomapError,
    NotFoundError,
    ParseError,
    DuplicateNodeError,
    UnknownNodeError,
    ModeMismatchError,
)

# Utilities
from .utils import read_config, list_config_dir, list_config_names

# Descriptor lookup and group index
from .robots import (
    parse_robot,
    load_robot,
    groups_of,
    ordered_groups,
    parse_controller,
    load_controller,
    list_robots,
    list_controllers,
    list_servo_models,
)

# Control profile
from .profile import ControlProfile

# Robot builder
from .robot_builder import RobotBuilder, ServoRow, ServoSpec, ServoMode

__all__ = [
    # Version
    "__version__",

    # Core models
    "ControlMode",
    "ControllerNode",
    "LinearConfig",
    "PresetConfig",
    "ModeConfig",
    "ServoDescriptor",
    "RobotDescriptor",
    "GROUP_CHOICE",
    "default_config",

    # Configuration
    "ServomapConfig",
    "get_config",
    "set_config",
    "reset_config",
    "ENV_CONFIG_DIR",
    "ENV_DEFAULT_ROBOT",
    "ENV_DEFAULT_CONTROLLER",

    # Exceptions
    "ServomapError",
    "NotFoundError",
    "ParseError",
    "DuplicateNodeError",
    "UnknownNodeError",
    "ModeMismatchError",

    # Utilities
    "read_config",
    "list_config_dir",
    "list_config_names",

    # Descriptor lookup and group index
    "parse_robot",
    "load_robot",
    "groups_of",
    "ordered_groups",
    "parse_controller",
    "load_controller",
    "list_robots",
    "list_controllers",
    "list_servo_models",

    # Control profile
    "ControlProfile",

    # Robot builder
    "RobotBuilder",
    "ServoRow",
    "ServoSpec",
    "ServoMode",
]
