# tests/test_validation/test_alignment.py

from dataclasses import replace

import pytest

from circmark.geometry import Point, Wire
from circmark.validation import (
    LayoutIssueCode,
    LayoutValidationError,
    LayoutValidator,
    ValidationIssueLevel,
)


@pytest.fixture
def validator():
    return LayoutValidator()


def codes(issues):
    return [issue.code for issue in issues]


def test_valid_layout_has_no_issues(validator, layout_of):
    assert validator.validate(layout_of("((R1||R2)+C1)")) == []
    assert validator.validate_or_raise(layout_of("|V1-R1|R2")) == []


def test_series_member_off_signal_line(validator, layout_of):
    root = layout_of("(R1+R2)")
    moved = replace(root.children[1], origin=Point(100.0, 5.0))
    broken = replace(root, children=(root.children[0], moved))

    issues = validator.validate(broken)
    assert codes(issues) == [LayoutIssueCode.SERIES_PORT_MISALIGNED.code]
    assert issues[0].level == ValidationIssueLevel.ERROR
    assert issues[0].node == "(R1+R2)"
    assert issues[0].details == {"left_index": 0, "right_index": 1}


def test_series_members_with_gap(validator, layout_of):
    root = layout_of("(R1+R2)")
    moved = replace(root.children[1], origin=Point(110.0, 0.0))
    broken = replace(root, children=(root.children[0], moved))
    assert codes(validator.validate(broken)) == [LayoutIssueCode.SERIES_NOT_ABUTTING.code]


def test_parallel_branch_detached_from_buses(validator, layout_of):
    root = layout_of("(R1||O)")
    moved = replace(root.children[1], origin=Point(10.0, 50.0))
    broken = replace(root, children=(root.children[0], moved))
    assert codes(validator.validate(broken)) == [
        LayoutIssueCode.PARALLEL_LEFT_OFF_BUS.code,
        LayoutIssueCode.PARALLEL_RIGHT_OFF_BUS.code,
    ]


def test_stub_wire_counts_as_reaching_the_bus(validator, layout_of):
    root = layout_of("(R1||O)")
    without_stub = replace(root, wires=tuple(w for w in root.wires if not w.is_horizontal))
    assert codes(validator.validate(root)) == []
    assert codes(validator.validate(without_stub)) == [LayoutIssueCode.PARALLEL_RIGHT_OFF_BUS.code]


def test_shunt_without_rail_wire(validator, layout_of):
    root = layout_of("|V1-R1|R2")
    broken = replace(root, wires=())
    assert codes(validator.validate(broken)) == [LayoutIssueCode.TWOPORT_SHUNT_OFF_RAIL.code] * 2


def test_series_link_off_signal_line(validator, layout_of):
    root = layout_of("|V1-R1|R2")
    moved = replace(root.children[1], origin=Point(80.0, 3.0))
    broken = replace(root, children=(root.children[0], moved, root.children[2]))
    issues = validator.validate(broken)
    assert codes(issues) == [LayoutIssueCode.TWOPORT_SERIES_OFF_SIGNAL.code]
    assert issues[0].details == {"index": 1}


def test_diagonal_wire(validator, layout_of):
    root = layout_of("(R1||R2)")
    broken = replace(root, wires=root.wires + (Wire(Point(0.0, 0.0), Point(5.0, 5.0)),))
    assert codes(validator.validate(broken)) == [LayoutIssueCode.WIRE_NOT_AXIS_ALIGNED.code]


def test_validate_or_raise(validator, layout_of):
    root = layout_of("(R1+R2)")
    broken = replace(root, children=(root.children[0], replace(root.children[1], origin=Point(100.0, 5.0))))
    with pytest.raises(LayoutValidationError) as excinfo:
        validator.validate_or_raise(broken)

    error = excinfo.value
    assert len(error.issues) == 1
    report = error.get_diagnostic_report()
    assert "Layout Validation Error" in report
    assert "SERIES_PORT_MISALIGNED" in report
    assert "Node:           (R1+R2)" in report


def test_issue_message_formatting():
    message = LayoutIssueCode.TWOPORT_SHUNT_OFF_RAIL.format_message(index=2, port=(1.0, 2.0), rail_y=9.0)
    assert message == "Shunt link 2 ends at (1.0, 2.0) without a wire down to the rail at y=9.0."
    assert "Missing key" in LayoutIssueCode.TWOPORT_SHUNT_OFF_RAIL.format_message(index=2)


def test_zero_length_wire_is_only_a_warning(validator, layout_of):
    root = layout_of("(R1||O)")
    degenerate = Wire(Point(100.0, 60.0), Point(100.0, 60.0))
    broken = replace(root, wires=root.wires + (degenerate,))

    issues = validator.validate_or_raise(broken)
    assert codes(issues) == [LayoutIssueCode.WIRE_ZERO_LENGTH.code]
    assert issues[0].level == ValidationIssueLevel.WARNING
    assert str(issues[0]).startswith("[WARNING - WIRE_ZERO_LENGTH]")


def test_validation_error_keeps_only_errors(validator, layout_of):
    root = layout_of("(R1||R2)")
    broken = replace(root, wires=root.wires + (
        Wire(Point(0.0, 0.0), Point(0.0, 0.0)),
        Wire(Point(0.0, 0.0), Point(5.0, 5.0)),
    ))
    with pytest.raises(LayoutValidationError) as excinfo:
        validator.validate_or_raise(broken)
    assert codes(excinfo.value.issues) == [LayoutIssueCode.WIRE_NOT_AXIS_ALIGNED.code]
    assert len(validator.issues) == 2
