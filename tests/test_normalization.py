"""
Tests for the numeric building blocks: safe division, the matrix builder,
criteria selection and the three column normalizers.
"""

import math

import numpy as np
import pytest

from core.errors import EmptyCandidateSet, NoOverlappingCriteria
from core.matrix import build_matrix, select_criteria
from core.models import Candidate, CriterionDirection, is_benefit
from core.normalization import min_max_normalize, reference_normalize, vector_normalize
from core.numeric import safe_divide, safe_divisor


class TestSafeDivide:
    """Zero-divisor substitution."""

    def test_scalar_zero_uses_fallback(self):
        assert safe_divide(5.0, 0.0) == 5.0
        assert safe_divide(5.0, 0.0, fallback=2.0) == 2.5

    def test_scalar_nonzero_divides(self):
        assert safe_divide(3.0, 4.0) == pytest.approx(0.75)

    def test_tiny_divisor_is_not_substituted(self):
        assert safe_divisor(1e-300) == 1e-300

    def test_array_elementwise(self):
        out = safe_divide(np.array([2.0, 6.0]), np.array([0.0, 3.0]))
        np.testing.assert_allclose(out, [2.0, 2.0])


class TestSelectCriteria:
    """Active criteria are weight keys present on the first candidate."""

    def test_intersection_in_candidate_key_order(self, candidates):
        cols = select_criteria(candidates, {"backlogs": 1, "cgpa": 1, "unknown": 5})
        assert cols == ["cgpa", "backlogs"]

    def test_only_first_candidate_is_inspected(self):
        cands = [
            Candidate(id="a", label="A", metrics={"cgpa": 8}),
            Candidate(id="b", label="B", metrics={"cgpa": 7, "sports": 4}),
        ]
        assert select_criteria(cands, {"cgpa": 1, "sports": 1}) == ["cgpa"]

    def test_no_overlap_raises(self, candidates):
        with pytest.raises(NoOverlappingCriteria):
            select_criteria(candidates, {"height": 1.0})

    def test_empty_candidates_raises_first(self):
        with pytest.raises(EmptyCandidateSet):
            select_criteria([], {})

    def test_explicit_schema_skips_candidate_keys(self):
        cands = [
            Candidate(id="a", label="A", metrics={"cgpa": 8}),
            Candidate(id="b", label="B", metrics={"cgpa": 7, "sports": 4}),
        ]
        cols = select_criteria(cands, {"cgpa": 1, "sports": 1}, criteria=["sports", "cgpa", "skills"])
        assert cols == ["sports", "cgpa"]


class TestBuildMatrix:
    """Decision matrix projection."""

    def test_shape_and_values(self, candidates):
        m = build_matrix(candidates, ["cgpa", "certificates"])
        assert m.shape == (3, 2)
        np.testing.assert_allclose(m[:, 1], [2, 5, 3])

    def test_missing_and_non_numeric_default_to_zero(self):
        cands = [
            Candidate(id="a", label="A", metrics={"cgpa": "8.5", "x": "abc"}),
            Candidate(id="b", label="B", metrics={"cgpa": None, "x": math.nan}),
            Candidate(id="c", label="C", metrics={}),
        ]
        m = build_matrix(cands, ["cgpa", "x"])
        np.testing.assert_allclose(m, [[8.5, 0.0], [0.0, 0.0], [0.0, 0.0]])

    def test_empty_candidates_raises(self):
        with pytest.raises(EmptyCandidateSet):
            build_matrix([], ["cgpa"])


class TestVectorNormalize:
    """Euclidean column normalization."""

    def test_unit_norm_columns(self):
        out = vector_normalize(np.array([[3.0, 1.0], [4.0, 0.0]]))
        np.testing.assert_allclose(out[:, 0], [0.6, 0.8])
        np.testing.assert_allclose(out[:, 1], [1.0, 0.0])

    def test_zero_column_stays_zero(self):
        out = vector_normalize(np.array([[0.0], [0.0]]))
        np.testing.assert_array_equal(out, [[0.0], [0.0]])

    def test_rejects_1d(self):
        with pytest.raises(ValueError):
            vector_normalize(np.array([1.0, 2.0]))


class TestMinMaxNormalize:
    """Direction-aware min-max scaling."""

    def test_benefit_column(self):
        out = min_max_normalize(np.array([[1.0], [3.0], [5.0]]), [True])
        np.testing.assert_allclose(out[:, 0], [0.0, 0.5, 1.0])

    def test_cost_column_is_inverted(self):
        out = min_max_normalize(np.array([[1.0], [3.0], [5.0]]), [False])
        np.testing.assert_allclose(out[:, 0], [1.0, 0.5, 0.0])

    def test_constant_column_is_zero(self):
        out = min_max_normalize(np.array([[4.0, 1.0], [4.0, 2.0]]), [True, False])
        np.testing.assert_allclose(out[:, 0], [0.0, 0.0])
        np.testing.assert_allclose(out[:, 1], [1.0, 0.0])

    def test_flag_length_mismatch(self):
        with pytest.raises(ValueError):
            min_max_normalize(np.array([[1.0, 2.0]]), [True])


class TestReferenceNormalize:
    """Division by per-column ceilings."""

    def test_divides_by_reference(self):
        out = reference_normalize(np.array([[9.0, 2.0]]), np.array([10.0, 4.0]))
        np.testing.assert_allclose(out, [[0.9, 0.5]])

    def test_zero_reference_becomes_one(self):
        out = reference_normalize(np.array([[0.0], [0.0]]), np.array([0.0]))
        np.testing.assert_array_equal(out, [[0.0], [0.0]])

    def test_reference_shape_mismatch(self):
        with pytest.raises(ValueError):
            reference_normalize(np.array([[1.0, 2.0]]), np.array([1.0]))


class TestCriterionDirection:
    """Only "cost" (any case) marks a criterion as lower-is-better."""

    @pytest.mark.parametrize("direction", ["cost", "COST", " Cost ", CriterionDirection.COST])
    def test_cost_spellings(self, direction):
        assert is_benefit("backlogs", {"backlogs": direction}) is False

    @pytest.mark.parametrize("direction", ["benefit", "Benefit", "neutral", None, CriterionDirection.BENEFIT])
    def test_everything_else_is_benefit(self, direction):
        assert is_benefit("cgpa", {"cgpa": direction}) is True

    def test_unclassified_defaults_to_benefit(self):
        assert is_benefit("cgpa", None) is True
        assert is_benefit("cgpa", {}) is True
