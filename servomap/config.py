"""
Servomap Configuration

Environment variable handling and configuration directory layout.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


# Environment variable names
ENV_CONFIG_DIR = "SERVOMAP_CONFIG_DIR"
ENV_DEFAULT_ROBOT = "SERVOMAP_DEFAULT_ROBOT"
ENV_DEFAULT_CONTROLLER = "SERVOMAP_DEFAULT_CONTROLLER"

DEFAULT_CONFIG_DIR = "~/.servomap"

# Subdirectories of the configuration root
ROBOTS_DIR = "Robots"
CONTROLLERS_DIR = "Controllers"
SERVOS_DIR = "Servos"


@dataclass
class ServomapConfig:
    """
    Global configuration for servomap.

    Attributes:
        config_dir: Root of the configuration tree
        default_robot: Robot selected when none is given (from SERVOMAP_DEFAULT_ROBOT)
        default_controller: Controller selected when none is given
        robots_dir: Name of the robot descriptor subdirectory
        controllers_dir: Name of the controller descriptor subdirectory
        servos_dir: Name of the servo model subdirectory
    """
    config_dir: Path = field(
        default_factory=lambda: Path(DEFAULT_CONFIG_DIR).expanduser()
    )
    default_robot: Optional[str] = None
    default_controller: Optional[str] = None
    robots_dir: str = ROBOTS_DIR
    controllers_dir: str = CONTROLLERS_DIR
    servos_dir: str = SERVOS_DIR

    @classmethod
    def from_environment(cls) -> "ServomapConfig":
        """
        Load configuration from environment variables.

        Environment Variables:
            SERVOMAP_CONFIG_DIR: Configuration root (default ~/.servomap)
            SERVOMAP_DEFAULT_ROBOT: Default robot identifier
            SERVOMAP_DEFAULT_CONTROLLER: Default controller identifier
        """
        config = cls()

        if env_dir := os.environ.get(ENV_CONFIG_DIR):
            config.config_dir = Path(os.path.expanduser(env_dir))

        config.default_robot = os.environ.get(ENV_DEFAULT_ROBOT)
        config.default_controller = os.environ.get(ENV_DEFAULT_CONTROLLER)

        return config

    @property
    def robots_path(self) -> Path:
        return self.config_dir / self.robots_dir

    @property
    def controllers_path(self) -> Path:
        return self.config_dir / self.controllers_dir

    @property
    def servos_path(self) -> Path:
        return self.config_dir / self.servos_dir

    def robot_file(self, robot_id: str) -> Path:
        """Path of the descriptor file for a robot identifier."""
        return self.robots_path / f"{robot_id}.json"

    def controller_file(self, controller_id: str) -> Path:
        """Path of the descriptor file for a controller identifier."""
        return self.controllers_path / f"{controller_id}.json"


# Global singleton
_config: Optional[ServomapConfig] = None


def get_config() -> ServomapConfig:
    """
    Get the global configuration singleton.

    Returns:
        ServomapConfig instance loaded from environment
    """
    global _config
    if _config is None:
        _config = ServomapConfig.from_environment()
    return _config


def reset_config() -> None:
    """
    Reset the global configuration singleton.

    Useful for testing or when environment variables change.
    """
    global _config
    _config = None


def set_config(config: ServomapConfig) -> None:
    """
    Set the global configuration singleton.

    Args:
        config: Configuration to use
    """
    global _config
    _config = config
