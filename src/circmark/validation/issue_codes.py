# src/circmark/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class LayoutIssueCode(Enum):
    """
    Registry of layout issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Series Groups (SERIES_...) ---
    SERIES_PORT_MISALIGNED = ("SERIES_PORT_MISALIGNED", "Right port of member {left_index} at {left_port} and left port of member {right_index} at {right_port} are not on the same signal line.")
    SERIES_NOT_ABUTTING = ("SERIES_NOT_ABUTTING", "Member {left_index} ends at {left_end} but member {right_index} starts at {right_start}.")

    # --- Parallel Groups (PARALLEL_...) ---
    PARALLEL_LEFT_OFF_BUS = ("PARALLEL_LEFT_OFF_BUS", "Left port of branch {index} at {port} does not reach the left bus at {bus}.")
    PARALLEL_RIGHT_OFF_BUS = ("PARALLEL_RIGHT_OFF_BUS", "Right port of branch {index} at {port} does not reach the right bus at {bus}.")
    PARALLEL_TAP_OFF_BUS = ("PARALLEL_TAP_OFF_BUS", "Group {side} port at {port} does not lie on its bus at {bus}.")

    # --- Twoport Networks (TWOPORT_...) ---
    TWOPORT_SERIES_OFF_SIGNAL = ("TWOPORT_SERIES_OFF_SIGNAL", "Series link {index} has its ports at y={port_y} instead of the signal line y={signal_y}.")
    TWOPORT_SHUNT_OFF_RAIL = ("TWOPORT_SHUNT_OFF_RAIL", "Shunt link {index} ends at {port} without a wire down to the rail at y={rail_y}.")

    # --- Wires (WIRE_...) ---
    WIRE_NOT_AXIS_ALIGNED = ("WIRE_NOT_AXIS_ALIGNED", "Wire from {start} to {end} is neither horizontal nor vertical.")
    WIRE_ZERO_LENGTH = ("WIRE_ZERO_LENGTH", "Wire at {start} has zero length and connects nothing.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
