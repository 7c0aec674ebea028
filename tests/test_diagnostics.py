"""Tests for the diagnostics collector."""

from ormrel.diagnostics import DiagnosticCode, Diagnostics, Severity


def test_collects_in_order(loguru_capture):
    diagnostics = Diagnostics()
    diagnostics.warn(DiagnosticCode.AMBIGUOUS_FACT_TYPE, "two UCs", "_F1")
    diagnostics.error(DiagnosticCode.UNRESOLVED_CONCEPT, "no entity", "_D1")

    assert len(diagnostics) == 2
    assert [d.severity for d in diagnostics] == [Severity.WARNING, Severity.ERROR]
    assert diagnostics.has_errors
    assert [d.element_id for d in diagnostics.warnings] == ["_F1"]
    assert str(diagnostics.errors[0]) == "[error] unresolved-concept: no entity"

    log = loguru_capture.getvalue()
    assert "WARNING" in log and "ambiguous-fact-type: two UCs" in log
    assert "ERROR" in log


def test_by_code():
    diagnostics = Diagnostics()
    diagnostics.warn(DiagnosticCode.INVALID_NAME, "bad name")
    assert diagnostics.by_code(DiagnosticCode.INVALID_NAME)[0].message == "bad name"
    assert diagnostics.by_code(DiagnosticCode.EMPTY_RELATION) == []
    assert not diagnostics.has_errors
