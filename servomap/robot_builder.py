"""
Robot builder.

Table model for enumerating the servos of a robot: one row per servo with its
ID, model, addressing protocol, operating mode and position limits. Editing
the limits and the mode keeps the two consistent, the way the servo table
in the editor behaves:

    - choosing WHEEL sets the limits to 0/0, JOINT sets them to 0/1024
    - editing a limit selects WHEEL when both limits are 0, JOINT otherwise

Hardware limits of the individual models are not checked.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .config import ServomapConfig
from .robots import list_servo_models

logger = logging.getLogger(__name__)


# Input ranges of the servo table
POSITION_MIN = 0
POSITION_MAX = 1024

PROTOCOLS = (1, 2)


class ServoMode(Enum):
    """Operating mode of a servo."""
    JOINT = "Joint"   # Position control between min and max
    WHEEL = "Wheel"   # Continuous rotation, limits both 0


@dataclass(frozen=True)
class ServoSpec:
    """
    A configured servo, as produced by RobotBuilder.build().

    Attributes:
        servo_id: Bus address of the servo
        model: Servo model name
        protocol: Addressing protocol version (1 or 2)
        mode: Operating mode
        min_pos: Lower position limit
        max_pos: Upper position limit
    """
    servo_id: int
    model: Optional[str]
    protocol: int = 1
    mode: ServoMode = ServoMode.JOINT
    min_pos: int = POSITION_MIN
    max_pos: int = POSITION_MAX

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.servo_id,
            "model": self.model,
            "protocol": self.protocol,
            "mode": self.mode.value,
            "min": self.min_pos,
            "max": self.max_pos,
        }


@dataclass
class ServoRow:
    """One editable row of the servo table (index is 1-based)."""
    index: int
    servo_id: Optional[int] = None
    model: Optional[str] = None
    protocol: int = 1
    mode: ServoMode = ServoMode.JOINT
    min_pos: int = POSITION_MIN
    max_pos: int = POSITION_MAX

    def __post_init__(self):
        if self.servo_id is None:
            self.servo_id = self.index

    def set_mode(self, mode: ServoMode) -> None:
        """Select a mode and reset the limits to match it."""
        self.mode = mode
        if mode == ServoMode.WHEEL:
            self.min_pos, self.max_pos = 0, 0
        else:
            self.min_pos, self.max_pos = POSITION_MIN, POSITION_MAX

    def set_limits(self, min_pos: Optional[int] = None, max_pos: Optional[int] = None) -> None:
        """Edit one or both limits and derive the mode from them."""
        if min_pos is not None:
            self.min_pos = int(min_pos)
        if max_pos is not None:
            self.max_pos = int(max_pos)
        if self.min_pos == 0 and self.max_pos == 0:
            self.mode = ServoMode.WHEEL
        else:
            self.mode = ServoMode.JOINT

    def set_protocol(self, protocol: int) -> None:
        if protocol not in PROTOCOLS:
            raise ValueError(f"Protocol must be one of {PROTOCOLS}, got {protocol!r}")
        self.protocol = protocol

    def to_spec(self) -> ServoSpec:
        return ServoSpec(
            servo_id=self.servo_id,
            model=self.model,
            protocol=self.protocol,
            mode=self.mode,
            min_pos=self.min_pos,
            max_pos=self.max_pos,
        )


class RobotBuilder:
    """
    Servo table for a new robot.

    Example:
        builder = RobotBuilder(models=["AX-12A", "MX-28"])
        builder.add_row()
        row = builder.add_row()
        row.set_mode(ServoMode.WHEEL)
        servos = builder.build()  # {1: ServoSpec(...), 2: ServoSpec(...)}
    """

    def __init__(
        self,
        models: Optional[List[str]] = None,
        config: Optional[ServomapConfig] = None,
    ):
        """
        Args:
            models: Available servo model names (listed from the Servos
                directory of the configuration when not given)
            config: Configuration used to list the models
        """
        if models is None:
            models = list_servo_models(config)
        self.models: List[str] = list(models)
        self._rows: List[ServoRow] = []

    @property
    def rows(self) -> List[ServoRow]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def row(self, index: int) -> ServoRow:
        """Get a row by its 1-based index."""
        if not 1 <= index <= len(self._rows):
            raise IndexError(f"No servo row {index}")
        return self._rows[index - 1]

    def set_model(self, index: int, model: str) -> None:
        """
        Set the model of a row to one of the available models.

        Raises:
            IndexError: If there is no row with this index
            ValueError: If the model is not in the available models
        """
        row = self.row(index)
        if model not in self.models:
            raise ValueError(f"Unknown servo model {model!r}, available: {self.models}")
        row.model = model

    def add_row(self) -> ServoRow:
        """Append a row with defaults: ID = row index, protocol 1, JOINT mode."""
        row = ServoRow(
            index=len(self._rows) + 1,
            model=self.models[0] if self.models else None,
        )
        self._rows.append(row)
        return row

    def remove_last_row(self, min_rows: int = 0) -> Optional[ServoRow]:
        """
        Remove the last row unless only min_rows rows remain.

        Returns:
            The removed row, or None if nothing was removed
        """
        if len(self._rows) > min_rows:
            return self._rows.pop()
        return None

    def reset_last_row(self) -> Optional[ServoRow]:
        """Replace the last row with a fresh one. No-op on an empty table."""
        if not self._rows:
            return None
        self._rows.pop()
        return self.add_row()

    def build(self) -> Dict[int, ServoSpec]:
        """
        Collect the rows into servo specs keyed by servo ID.

        A later row with the same ID replaces an earlier one.
        """
        servos: Dict[int, ServoSpec] = {}
        for row in self._rows:
            if row.servo_id in servos:
                logger.warning(
                    "Servo ID %d used by more than one row, row %d wins",
                    row.servo_id, row.index,
                )
            servos[row.servo_id] = row.to_spec()
        return servos
