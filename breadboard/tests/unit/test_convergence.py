"""Tests for simulation.convergence error classification."""

import pytest
from breadboard.simulation.convergence import (ErrorCategory, ErrorDiagnosis,
                                               classify_error, diagnose_error,
                                               format_user_message)
from breadboard.simulation.solver import MnaSolver, SolverError
from breadboard.simulation.translator import translate_circuit
from conftest import MINUS, PLUS, build_snapshot


class TestClassifyError:
    def test_singular_matrix(self):
        assert classify_error("Singular matrix") == ErrorCategory.SINGULAR_MATRIX

    def test_invalid_value(self):
        assert classify_error("Resistance of P1 must be positive, got -5") == ErrorCategory.INVALID_VALUE

    def test_non_finite(self):
        assert classify_error("Solver produced non-finite values") == ErrorCategory.NON_FINITE
        assert classify_error("got NaN") == ErrorCategory.NON_FINITE

    def test_words_containing_inf_are_not_non_finite(self):
        assert classify_error("missing information") == ErrorCategory.UNKNOWN

    def test_empty_and_unknown(self):
        assert classify_error("") == ErrorCategory.UNKNOWN
        assert classify_error("something odd") == ErrorCategory.UNKNOWN


class TestDiagnoseError:
    def test_uses_solver_error_category(self):
        error = SolverError("whatever", ErrorCategory.SINGULAR_MATRIX)
        diag = diagnose_error(error)
        assert isinstance(diag, ErrorDiagnosis)
        assert diag.category == ErrorCategory.SINGULAR_MATRIX

    def test_falls_back_to_message(self):
        assert diagnose_error(RuntimeError("singular")).category == ErrorCategory.SINGULAR_MATRIX
        assert diagnose_error("nothing known").category == ErrorCategory.UNKNOWN

    def test_every_category_has_a_diagnosis(self):
        for category in ErrorCategory:
            diag = diagnose_error(SolverError("x", category))
            assert diag.message
            assert diag.suggestions


class TestFormatUserMessage:
    def test_includes_causes_and_suggestions(self):
        msg = format_user_message(diagnose_error(SolverError("x", ErrorCategory.INVALID_VALUE)))
        assert msg.startswith("A component has a value")
        assert "Common causes:" in msg
        assert "Suggestions:" in msg
        assert "  - " in msg

    def test_no_causes_section_when_empty(self):
        msg = format_user_message(diagnose_error("mystery"))
        assert "Common causes:" not in msg
        assert "Suggestions:" in msg


class TestSingularCauses:
    def test_opposed_batteries_do_not_make_the_matrix_singular(self, opposed_batteries):
        solution = MnaSolver().solve(translate_circuit(opposed_batteries).netlist)
        assert abs(solution.branch_currents["B1"]) > 1.0

    def test_diagnosis_names_reachable_causes(self):
        diag = diagnose_error(SolverError("x", ErrorCategory.SINGULAR_MATRIX))
        assert not any("batteries" in cause.lower() for cause in diag.causes)
        assert any("gmin=0" in cause for cause in diag.causes)

    def test_solver_without_gmin_and_dangling_bulb_is_singular(self):
        snapshot = build_snapshot(
            [("battery", "B1"), ("bulb", "L1"), ("bulb", "L2")],
            [("B1", PLUS, "L1", 0), ("L1", 1, "B1", MINUS)],
        )
        with pytest.raises(SolverError) as exc:
            MnaSolver(gmin=0.0).solve(translate_circuit(snapshot).netlist)
        assert diagnose_error(exc.value).category == ErrorCategory.SINGULAR_MATRIX
