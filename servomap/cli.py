"""
Servomap CLI

Command-line interface for browsing the robot and controller configuration
a control profile is built from.

Usage:
    servomap robots
    servomap groups hexapod
    servomap items hexapod
    servomap nodes xbox

Environment Variables:
    SERVOMAP_CONFIG_DIR - Configuration root (default: ~/.servomap)
    SERVOMAP_DEFAULT_ROBOT - Robot used when ROBOT is omitted
    SERVOMAP_DEFAULT_CONTROLLER - Controller used when CONTROLLER is omitted
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import ENV_CONFIG_DIR, ServomapConfig, get_config, set_config
from .exceptions import ServomapError
from .profile import ControlProfile
from .robot_builder import RobotBuilder, ServoMode
from .robots import list_controllers, list_robots, list_servo_models, load_controller


def _resolve(value: Optional[str], default: Optional[str], what: str) -> str:
    """Use the given identifier or fall back to the configured default."""
    value = value or default
    if not value:
        raise click.UsageError(f"No {what} given and no default configured")
    return value


def _echo_names(names, empty: str) -> None:
    if not names:
        click.echo(empty)
        return
    for name in names:
        click.echo(f"  {name}")


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config-dir", "-c",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Configuration root (env: {ENV_CONFIG_DIR})"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Show debug logging"
)
def cli(config_dir: Optional[Path], verbose: bool):
    """Servomap - controller-to-servo profile configuration"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if config_dir is not None:
        config = ServomapConfig.from_environment()
        config.config_dir = config_dir
        set_config(config)


@cli.command("robots")
def robots_cmd():
    """List available robots."""
    _echo_names(list_robots(), "No robots found")


@cli.command("controllers")
def controllers_cmd():
    """List available controllers."""
    _echo_names(list_controllers(), "No controllers found")


@cli.command("models")
def models_cmd():
    """List available servo models."""
    _echo_names(list_servo_models(), "No servo models found")


@cli.command("groups")
@click.argument("robot", required=False)
def groups_cmd(robot: Optional[str]):
    """List the servo groups of a robot (choices for Linear mode)."""
    robot = _resolve(robot, get_config().default_robot, "robot")
    try:
        profile = ControlProfile()
        profile.use_robot(robot)
    except ServomapError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _echo_names(profile.group_choices(), f"Robot {robot} has no groups")


@cli.command("items")
@click.argument("robot", required=False)
def items_cmd(robot: Optional[str]):
    """List the servos and groups of a robot (choices for Preset mode)."""
    robot = _resolve(robot, get_config().default_robot, "robot")
    try:
        profile = ControlProfile()
        profile.use_robot(robot)
    except ServomapError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for heading, names in profile.preset_choices().items():
        click.echo(f"{heading}:")
        _echo_names(names, "  (none)")


@cli.command("nodes")
@click.argument("controller", required=False)
def nodes_cmd(controller: Optional[str]):
    """List the nodes of a controller."""
    controller = _resolve(controller, get_config().default_controller, "controller")
    try:
        nodes = load_controller(controller)
    except ServomapError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _echo_names(nodes, f"Controller {controller} has no nodes")


@cli.command("new-robot")
@click.argument("count", type=click.IntRange(min=1))
@click.option(
    "--wheel", "-w",
    type=int,
    multiple=True,
    help="Row number (1-based) to put in wheel mode; repeatable"
)
def new_robot_cmd(count: int, wheel):
    """Print a default servo table for COUNT servos as JSON."""
    builder = RobotBuilder()
    for _ in range(count):
        builder.add_row()

    for index in wheel:
        try:
            row = builder.row(index)
        except IndexError as e:
            raise click.BadParameter(str(e), param_hint="--wheel")
        row.set_mode(ServoMode.WHEEL)

    servos = {str(sid): spec.to_dict() for sid, spec in builder.build().items()}
    click.echo(json.dumps(servos, indent=2))


def main():
    cli()


if __name__ == "__main__":
    main()
