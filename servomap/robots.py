"""
Robot and controller descriptor lookup.

Robot descriptors live in ``<config_dir>/Robots/<robot_id>.json`` and map
servo names to objects carrying at least a ``groups`` list::

    {
        "hip_left": {"groups": ["legs", "left"]},
        "hip_right": {"groups": ["legs", "right"], "id": 2}
    }

Controller descriptors live in ``<config_dir>/Controllers/<id>.json`` and
carry a ``nodes`` object keyed by node name.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Set

from .config import ServomapConfig, get_config
from .exceptions import ParseError
from .models import RobotDescriptor, ServoDescriptor
from .utils import list_config_names, read_config

logger = logging.getLogger(__name__)


def _read(path, source: str) -> str:
    try:
        return read_config(path)
    except UnicodeDecodeError as e:
        raise ParseError(source, str(e)) from e


def _decode(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(source, str(e)) from e


def parse_robot(text: str, robot_id: str = "<string>") -> RobotDescriptor:
    """
    Parse robot descriptor JSON.

    Args:
        text: Raw descriptor contents
        robot_id: Identifier used for the descriptor and in error messages

    Returns:
        RobotDescriptor for the robot

    Raises:
        ParseError: If the text is not JSON or does not have the expected shape
    """
    data = _decode(text, robot_id)
    if not isinstance(data, dict):
        raise ParseError(robot_id, "expected an object of servos")

    servos: Dict[str, ServoDescriptor] = {}
    for name, entry in data.items():
        if not isinstance(entry, dict):
            raise ParseError(robot_id, f"servo {name} is not an object")
        groups = entry.get("groups")
        if not isinstance(groups, list):
            raise ParseError(robot_id, f"servo {name} has no groups list")
        if not all(isinstance(g, str) for g in groups):
            raise ParseError(robot_id, f"servo {name} has a non-string group")
        # Other fields (id, model, limits) are not used here
        servos[name] = ServoDescriptor(name=name, groups=tuple(groups))

    return RobotDescriptor(robot_id, servos)


def load_robot(robot_id: str, config: Optional[ServomapConfig] = None) -> RobotDescriptor:
    """
    Load a robot descriptor by identifier.

    Raises:
        NotFoundError: If no descriptor file exists for the identifier
        ParseError: If the descriptor is malformed
    """
    config = config or get_config()
    path = config.robot_file(robot_id)
    robot = parse_robot(_read(path, robot_id), robot_id)
    logger.debug("Loaded robot %s with %d servos", robot_id, len(robot))
    return robot


def groups_of(robot: RobotDescriptor) -> Set[str]:
    """Union of the groups of every servo in a robot, deduplicated."""
    groups: Set[str] = set()
    for servo in robot.values():
        groups.update(servo.groups)
    return groups


def ordered_groups(robot: RobotDescriptor) -> List[str]:
    """The same names as groups_of(), in first-seen order for choice lists."""
    groups: List[str] = []
    for servo in robot.values():
        for group in servo.groups:
            if group not in groups:
                groups.append(group)
    return groups


def parse_controller(text: str, controller_id: str = "<string>") -> List[str]:
    """
    Parse controller descriptor JSON into its node names, in file order.

    Raises:
        ParseError: If the text is not JSON or has no ``nodes`` object
    """
    data = _decode(text, controller_id)
    if not isinstance(data, dict) or not isinstance(data.get("nodes"), dict):
        raise ParseError(controller_id, "expected an object with a nodes object")
    return list(data["nodes"])


def load_controller(controller_id: str, config: Optional[ServomapConfig] = None) -> List[str]:
    """
    Load the node names of a controller by identifier.

    Raises:
        NotFoundError: If no descriptor file exists for the identifier
        ParseError: If the descriptor is malformed
    """
    config = config or get_config()
    text = _read(config.controller_file(controller_id), controller_id)
    nodes = parse_controller(text, controller_id)
    logger.debug("Loaded controller %s with %d nodes", controller_id, len(nodes))
    return nodes


def list_robots(config: Optional[ServomapConfig] = None) -> List[str]:
    """Identifiers of the available robot descriptors."""
    return list_config_names((config or get_config()).robots_path)


def list_controllers(config: Optional[ServomapConfig] = None) -> List[str]:
    """Identifiers of the available controller descriptors."""
    return list_config_names((config or get_config()).controllers_path)


def list_servo_models(config: Optional[ServomapConfig] = None) -> List[str]:
    """Names of the available servo models."""
    return list_config_names((config or get_config()).servos_path)
