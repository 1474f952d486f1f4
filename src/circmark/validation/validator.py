# src/circmark/validation/validator.py
import logging
import math
from typing import List

from ..geometry import Point
from ..layout.nodes import LayoutNode
from ..parser.tree import LinkKind, ParallelGroup, SeriesGroup, TwoportNetwork
from .exceptions import LayoutValidationError
from .issue_codes import LayoutIssueCode
from .issues import ValidationIssue, ValidationIssueLevel

logger = logging.getLogger(__name__)


def _same(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=0.0, abs_tol=1e-9)


def _along(node: LayoutNode, point: Point) -> float:
    """Coordinate of ``point`` along ``node``'s signal axis."""
    return point.y if node.rotated else point.x


def _across(node: LayoutNode, point: Point) -> float:
    return point.x if node.rotated else point.y


class LayoutValidator:
    """
    Checks a positioned layout tree against the port-alignment rules:

    - adjacent series members share their signal line and abut exactly;
    - every parallel branch reaches both buses, directly or via a stub wire;
    - twoport series targets sit on the signal line and shunt targets reach the rail;
    - every wire is horizontal or vertical.

    A zero-length wire is reported as a WARNING; everything else is an ERROR.

    Rotated subtrees are checked in their own orientation.
    """

    def __init__(self):
        self.issues: List[ValidationIssue] = []

    def validate(self, layout: LayoutNode) -> List[ValidationIssue]:
        """
        Returns all issues found in ``layout``. An empty list means the layout
        keeps every port aligned.
        """
        self.issues = []
        for layout_node in layout.walk():
            if isinstance(layout_node.node, SeriesGroup):
                self._check_series(layout_node)
            elif isinstance(layout_node.node, ParallelGroup):
                self._check_parallel(layout_node)
            elif isinstance(layout_node.node, TwoportNetwork):
                self._check_twoport(layout_node)
            self._check_wires(layout_node)

        if self.issues:
            logger.info(f"Layout validation found {len(self.issues)} issue(s).")
        else:
            logger.debug("Layout validation complete with no issues found.")
        return self.issues

    def validate_or_raise(self, layout: LayoutNode) -> List[ValidationIssue]:
        """Like `validate`, but raises `LayoutValidationError` on any ERROR-level issue."""
        issues = self.validate(layout)
        if any(issue.level == ValidationIssueLevel.ERROR for issue in issues):
            raise LayoutValidationError(issues)
        return issues

    def _add_issue(
        self, code_enum: LayoutIssueCode, layout_node: LayoutNode,
        level: ValidationIssueLevel = ValidationIssueLevel.ERROR, **kwargs,
    ):
        self.issues.append(ValidationIssue(
            level=level,
            code=code_enum.code,
            message=code_enum.format_message(**kwargs),
            node=str(layout_node.node),
            details={k: v for k, v in kwargs.items() if k.endswith("index")},
        ))

    def _check_series(self, group: LayoutNode):
        members = group.children
        for index, (left, right) in enumerate(zip(members, members[1:])):
            left_port, right_port = left.abs_right_port, right.abs_left_port
            if not _same(_across(group, left_port), _across(group, right_port)):
                self._add_issue(
                    LayoutIssueCode.SERIES_PORT_MISALIGNED, group,
                    left_index=index, right_index=index + 1,
                    left_port=left_port.as_tuple(), right_port=right_port.as_tuple(),
                )
            left_end = _along(group, left.bottom_right)
            right_start = _along(group, right.origin)
            if not _same(left_end, right_start) or not _same(_along(group, left_port), _along(group, right_port)):
                self._add_issue(
                    LayoutIssueCode.SERIES_NOT_ABUTTING, group,
                    left_index=index, right_index=index + 1,
                    left_end=left_end, right_start=right_start,
                )

    def _check_parallel(self, group: LayoutNode):
        for side, port, bus in (
            ("left", group.abs_left_port, group.left_bus),
            ("right", group.abs_right_port, group.right_bus),
        ):
            if bus is None or not _same(_along(group, port), bus):
                self._add_issue(LayoutIssueCode.PARALLEL_TAP_OFF_BUS, group, side=side, port=port.as_tuple(), bus=bus)

        for index, branch in enumerate(group.children):
            if not self._reaches_bus(group, branch.abs_left_port, group.left_bus):
                self._add_issue(
                    LayoutIssueCode.PARALLEL_LEFT_OFF_BUS, group,
                    index=index, port=branch.abs_left_port.as_tuple(), bus=group.left_bus,
                )
            if not self._reaches_bus(group, branch.abs_right_port, group.right_bus):
                self._add_issue(
                    LayoutIssueCode.PARALLEL_RIGHT_OFF_BUS, group,
                    index=index, port=branch.abs_right_port.as_tuple(), bus=group.right_bus,
                )

    def _reaches_bus(self, group: LayoutNode, port: Point, bus) -> bool:
        if bus is None:
            return False
        if _same(_along(group, port), bus):
            return True
        # Otherwise a straight stub wire must run from the port to the bus.
        for wire in group.wires:
            for start, end in ((wire.start, wire.end), (wire.end, wire.start)):
                if (
                    _same(start.x, port.x) and _same(start.y, port.y)
                    and _same(_along(group, end), bus)
                    and _same(_across(group, end), _across(group, port))
                ):
                    return True
        return False

    def _check_twoport(self, network: LayoutNode):
        signal_y = network.abs_left_port.y
        rail_y = network.rail
        for index, (link, target) in enumerate(zip(network.node.links, network.children)):
            if link.kind is LinkKind.SERIES:
                for port in (target.abs_left_port, target.abs_right_port):
                    if not _same(port.y, signal_y):
                        self._add_issue(
                            LayoutIssueCode.TWOPORT_SERIES_OFF_SIGNAL, network,
                            index=index, port_y=port.y, signal_y=signal_y,
                        )
                        break
                continue

            bottom = target.abs_right_port
            if rail_y is not None and _same(bottom.y, rail_y):
                continue
            reaches_rail = rail_y is not None and any(
                w.is_vertical and _same(w.start.x, bottom.x)
                and {round(w.start.y, 9), round(w.end.y, 9)} == {round(bottom.y, 9), round(rail_y, 9)}
                for w in network.wires
            )
            if not reaches_rail:
                self._add_issue(
                    LayoutIssueCode.TWOPORT_SHUNT_OFF_RAIL, network,
                    index=index, port=bottom.as_tuple(), rail_y=rail_y,
                )

    def _check_wires(self, layout_node: LayoutNode):
        for wire in layout_node.wires:
            if wire.length == 0:
                self._add_issue(
                    LayoutIssueCode.WIRE_ZERO_LENGTH, layout_node,
                    level=ValidationIssueLevel.WARNING, start=wire.start.as_tuple(),
                )
                continue
            if not (wire.is_horizontal or wire.is_vertical):
                self._add_issue(
                    LayoutIssueCode.WIRE_NOT_AXIS_ALIGNED, layout_node,
                    start=wire.start.as_tuple(), end=wire.end.as_tuple(),
                )
