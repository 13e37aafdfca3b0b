"""
Servomap Control Profile

In-memory mapping of controller nodes to the behavior each one drives.
"""

import copy
import logging
import threading
from typing import Any, Dict, Iterator, List, Optional, Union

from .config import ServomapConfig, get_config
from .exceptions import DuplicateNodeError, ModeMismatchError, UnknownNodeError
from .models import (
    INVERT_NO,
    INVERT_VALUES,
    INVERT_YES,
    ControllerNode,
    ControlMode,
    ModeConfig,
    RobotDescriptor,
    default_config,
)
from .robots import load_controller, load_robot, ordered_groups

logger = logging.getLogger(__name__)


class ControlProfile:
    """
    Thread-safe control profile for one controller/robot pairing.

    Tracks, per controller node, the active mode and its settings, and
    enforces the transition rules between modes:

        - switching to a different mode discards the old settings and
          starts from the new mode's defaults
        - reselecting the current mode keeps settings that are complete
        - selecting a preset item retracts the item previously selected
          on the same node

    Every rejected operation leaves the profile unchanged.

    Example:
        profile = ControlProfile()
        profile.register_node("axis1")
        profile.select_mode("axis1", "Linear")
        profile.set_linear_group("axis1", "legs")
        profile.snapshot("axis1")  # LinearConfig(group='legs', invert='Yes')
    """

    def __init__(self, config: Optional[ServomapConfig] = None):
        """
        Initialize an empty profile.

        Args:
            config: Configuration used to resolve controllers and robots
                (defaults to the global configuration)
        """
        self._nodes: Dict[str, ControllerNode] = {}   # node name -> node
        self._last_preset: Dict[str, str] = {}        # node name -> last preset item
        self._lock = threading.RLock()
        self._config = config
        self.controller: Optional[str] = None
        self._robot: Optional[RobotDescriptor] = None

    @property
    def config(self) -> ServomapConfig:
        return self._config or get_config()

    # === Nodes ===

    def register_node(self, name: str) -> ControllerNode:
        """
        Add a controller node with no mode selected.

        Raises:
            DuplicateNodeError: If a node with this name exists
        """
        with self._lock:
            if name in self._nodes:
                raise DuplicateNodeError(name)
            node = ControllerNode(name)
            self._nodes[name] = node
            logger.debug("Registered node %s", name)
            return node

    def _get(self, name: str) -> ControllerNode:
        node = self._nodes.get(name)
        if node is None:
            raise UnknownNodeError(name)
        return node

    def _require(self, name: str, mode: ControlMode) -> ControllerNode:
        node = self._get(name)
        if node.mode != mode:
            raise ModeMismatchError(name, mode, node.mode)
        return node

    def mode_of(self, name: str) -> ControlMode:
        """Get the active mode of a node."""
        with self._lock:
            return self._get(name).mode

    # === Mode transitions ===

    def is_preconfigured(self, name: str, mode: Union[str, ControlMode]) -> bool:
        """
        Check whether a node already holds a complete configuration for a mode.

        Raises:
            UnknownNodeError: If the node is not registered
            ValueError: If the mode label is unknown
        """
        mode = ControlMode.from_label(mode)
        with self._lock:
            config = self._get(name).config
            return config is not None and config.mode == mode and config.is_complete()

    def select_mode(self, name: str, mode: Union[str, ControlMode]) -> ModeConfig:
        """
        Switch a node to a mode.

        A node already holding a complete configuration for the mode keeps
        it; otherwise the node starts from the mode's defaults.

        Args:
            name: Node name
            mode: Mode or mode label ("Linear", "Preset")

        Returns:
            Copy of the node's configuration after the switch

        Raises:
            UnknownNodeError: If the node is not registered
            ValueError: If the mode is unknown or UNSET
        """
        mode = ControlMode.from_label(mode)
        if mode == ControlMode.UNSET:
            raise ValueError("Cannot select the Unset mode")

        with self._lock:
            node = self._get(name)
            if self.is_preconfigured(name, mode):
                logger.debug("Node %s keeps its %s configuration", name, mode.value)
            else:
                logger.debug(
                    "Node %s: %s -> %s (defaults)", name, node.mode.value, mode.value
                )
                node.config = default_config(mode)
                self._last_preset.pop(name, None)
            return copy.deepcopy(node.config)

    # === Linear settings ===

    def set_linear_group(self, name: str, group: str) -> None:
        """
        Set the servo group driven by a Linear node.

        The group is not checked against the robot's groups.

        Raises:
            UnknownNodeError: If the node is not registered
            ModeMismatchError: If the node is not in Linear mode
            ValueError: If the group is not a non-empty string
        """
        with self._lock:
            node = self._require(name, ControlMode.LINEAR)
            if not isinstance(group, str) or not group:
                raise ValueError(f"Group must be a non-empty string, got {group!r}")
            node.config.group = group

    def set_linear_invert(self, name: str, value: Union[str, bool]) -> None:
        """
        Set whether a Linear node's control is inverted.

        Args:
            name: Node name
            value: "Yes"/"No", or a bool

        Raises:
            UnknownNodeError: If the node is not registered
            ModeMismatchError: If the node is not in Linear mode
            ValueError: If the value is neither "Yes" nor "No"
        """
        if isinstance(value, bool):
            value = INVERT_YES if value else INVERT_NO
        with self._lock:
            node = self._require(name, ControlMode.LINEAR)
            if value not in INVERT_VALUES:
                raise ValueError(f"Invert must be one of {INVERT_VALUES}, got {value!r}")
            node.config.invert = value

    # === Preset settings ===

    def select_preset_item(self, name: str, item: str) -> None:
        """
        Select the item a Preset node targets.

        The item previously selected on this node, if still present, is
        removed before the new one is recorded.

        Raises:
            UnknownNodeError: If the node is not registered
            ModeMismatchError: If the node is not in Preset mode
        """
        with self._lock:
            node = self._require(name, ControlMode.PRESET)
            items = node.config.items

            previous = self._last_preset.get(name)
            if previous is not None and previous in items:
                del items[previous]
                logger.debug("Node %s: retracted preset item %s", name, previous)

            items[item] = None
            self._last_preset[name] = item

    # === Queries ===

    def snapshot(self, name: str) -> Optional[ModeConfig]:
        """
        Get a copy of a node's configuration (None while the mode is unset).

        Raises:
            UnknownNodeError: If the node is not registered
        """
        with self._lock:
            return copy.deepcopy(self._get(name).config)

    @property
    def nodes(self) -> List[str]:
        """Registered node names, in registration order."""
        with self._lock:
            return list(self._nodes)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._nodes))

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._nodes

    def clear(self) -> None:
        """Remove every node and the remembered preset selections."""
        with self._lock:
            self._nodes.clear()
            self._last_preset.clear()

    # === Controller and robot selection ===

    def use_controller(self, controller_id: str) -> List[str]:
        """
        Select a controller and register each of its nodes.

        Nodes already in the profile keep their configuration.

        Returns:
            Names of the nodes that were added

        Raises:
            NotFoundError: If the controller descriptor does not exist
            ParseError: If the controller descriptor is malformed
        """
        names = load_controller(controller_id, self.config)
        with self._lock:
            added = [n for n in names if n not in self._nodes]
            for name in added:
                self.register_node(name)
            self.controller = controller_id
        return added

    def use_robot(self, robot_id: str) -> RobotDescriptor:
        """
        Select the target robot, loading its descriptor.

        Raises:
            NotFoundError: If the robot descriptor does not exist
            ParseError: If the robot descriptor is malformed
        """
        robot = load_robot(robot_id, self.config)
        with self._lock:
            self._robot = robot
        return robot

    @property
    def robot(self) -> Optional[str]:
        """Identifier of the selected robot."""
        return self._robot.robot_id if self._robot else None

    def group_choices(self) -> List[str]:
        """Groups of the selected robot for Linear setup (empty without a robot)."""
        if self._robot is None:
            return []
        return ordered_groups(self._robot)

    def preset_choices(self) -> Dict[str, List[str]]:
        """Servos and groups of the selected robot, for Preset setup."""
        if self._robot is None:
            return {"Servos": [], "Groups": []}
        return {
            "Servos": list(self._robot.servo_names),
            "Groups": ordered_groups(self._robot),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view of the profile: selections plus each node's settings."""
        with self._lock:
            data: Dict[str, Any] = {
                "controller": self.controller,
                "robot": self.robot,
                "nodes": {name: node.to_dict() for name, node in self._nodes.items()},
            }
            return data

    def __repr__(self) -> str:
        return (
            f"ControlProfile(controller={self.controller}, "
            f"robot={self.robot}, nodes={len(self._nodes)})"
        )
