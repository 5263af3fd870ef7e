"""
Test the user-facing MatrixReduction interface.
"""

import json

import pytest
import numpy as np
import pandas as pd

import pyrref
from pyrref import reduce, MatrixReduction, SolutionType, InvalidShapeError


SIMPLE_SYSTEM = [[2, 1, 5], [1, -1, 1]]
DEPENDENT_SYSTEM = [[1, 2, 3], [2, 4, 6]]
INVERTIBLE_3x3 = [[2, -1, 0], [-1, 2, -1], [0, -1, 2]]


class TestReduce:
    """Test what gets computed for each kind of input."""

    def test_augmented_system(self):
        """Test an augmented system is solved and skips determinant."""
        r = reduce(SIMPLE_SYSTEM, augmented=True)
        assert isinstance(r, MatrixReduction)
        assert r.analysis.solution_type is SolutionType.UNIQUE
        np.testing.assert_allclose(r.analysis.solution, [2.0, 1.0])
        assert r.determinant is None
        assert r.inverse is None
        assert r.rank == 2

    def test_square_matrix(self):
        """Test a square plain matrix gets determinant and inverse."""
        r = reduce(INVERTIBLE_3x3)
        assert r.analysis.solution_type is SolutionType.NOT_APPLICABLE
        assert r.determinant == pytest.approx(4.0)
        np.testing.assert_allclose(r.inverse @ r.matrix, np.eye(3), atol=1e-9)

    def test_square_augmented_skips_inverse(self):
        """Test a square matrix flagged as augmented is not inverted."""
        r = reduce([[1, 2], [3, 4]], augmented=True)
        assert r.determinant is None
        assert r.inverse is None

    def test_singular_square(self):
        """Test a singular matrix has zero determinant and no inverse."""
        r = reduce([[1, 2], [2, 4]])
        assert r.determinant == 0.0
        assert r.inverse is None

    def test_non_square(self):
        r = reduce([[1, 2, 3], [4, 5, 6]])
        assert r.determinant is None
        assert r.inverse is None
        assert r.shape == (2, 3)

    def test_input_not_modified(self):
        matrix = [[2, 1, 5], [1, -1, 1]]
        reduce(matrix, augmented=True)
        assert matrix == [[2, 1, 5], [1, -1, 1]]

    def test_rejects_nan(self):
        """Test non-finite entries are rejected before elimination."""
        with pytest.raises(ValueError, match="NaN or Inf"):
            reduce([[1, np.nan], [0, 1]])

    def test_rejects_ragged(self):
        with pytest.raises(InvalidShapeError):
            reduce([[1, 2], [3]])

    def test_show_fractions(self):
        r = reduce(SIMPLE_SYSTEM, augmented=True, show_fractions=True)
        assert r.steps[2].description == "R2 ← R2 / -3/2"

    def test_inverse_disagreement_warns(self, monkeypatch):
        """Test a warning when the determinant and identity check disagree."""
        monkeypatch.setattr(pyrref.reduction, 'inverse', lambda matrix, tol=None: None)
        with pytest.warns(UserWarning, match="singular"):
            r = reduce(INVERTIBLE_3x3)
        assert r.inverse is None

    def test_repr(self):
        r = reduce(DEPENDENT_SYSTEM, augmented=True)
        assert repr(r) == "MatrixReduction(shape=2x3, rank=1, solution='infinite')"


class TestExport:
    """Test DataFrame and dict views."""

    def test_rref_frame_augmented(self):
        frame = reduce(SIMPLE_SYSTEM, augmented=True).rref_frame()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ['x1', 'x2', 'b']
        assert list(frame.index) == ['R1', 'R2']
        np.testing.assert_allclose(frame['b'].values, [2.0, 1.0])

    def test_rref_frame_plain(self):
        frame = reduce(INVERTIBLE_3x3).rref_frame()
        assert list(frame.columns) == ['x1', 'x2', 'x3']

    def test_steps_frame(self):
        """Test one DataFrame row per step with 1-based rows."""
        r = reduce([[1, 2], [3, 4]])
        frame = r.steps_frame()
        assert len(frame) == len(r.steps)
        assert list(frame.columns) == ['kind', 'row', 'other_row', 'factor', 'description']
        assert frame.index[0] == 1
        first = frame.iloc[0]
        assert first['kind'] == 'swap'
        assert first['row'] == 1
        assert first['other_row'] == 2
        assert first['description'] == "R1 ↔ R2"

    def test_steps_frame_empty(self):
        frame = reduce(np.eye(2)).steps_frame()
        assert len(frame) == 0
        assert list(frame.columns) == ['kind', 'row', 'other_row', 'factor', 'description']

    def test_to_dict_infinite(self):
        """Test the export structure for a parametric solution."""
        r = reduce(DEPENDENT_SYSTEM, augmented=True)
        data = r.to_dict()
        assert data['input'] == [[1.0, 2.0, 3.0], [2.0, 4.0, 6.0]]
        assert data['rref'] == [[1.0, 2.0, 3.0], [0.0, 0.0, 0.0]]
        assert data['steps'] == [s.description for s in r.steps]
        assert data['pivots'] == [[0, 0]]
        assert data['analysis'] == {
            'rank': 1,
            'pivotCols': [0],
            'solutionType': 'infinite',
            'solution': [{'var': 0, 'constant': 3.0, 'params': {'1': -2.0}}],
            'freeCols': [1],
        }
        assert data['determinant'] is None
        assert data['inverse'] is None

    def test_to_dict_is_json_serializable(self):
        for matrix, augmented in [(SIMPLE_SYSTEM, True), (INVERTIBLE_3x3, False),
                                  ([[1, 2, 3], [2, 4, 5]], True)]:
            data = reduce(matrix, augmented=augmented).to_dict()
            assert json.loads(json.dumps(data)) == data


class TestSummary:
    """Test the printed report."""

    def test_summary_augmented(self, capsys):
        reduce(SIMPLE_SYSTEM, augmented=True).summary()
        out = capsys.readouterr().out
        assert 'ROW REDUCTION RESULTS' in out
        assert 'Rank:          2' in out
        assert 'Solution: unique' in out
        assert 'x1 = 2.0000' in out
        assert 'Determinant' not in out

    def test_summary_square(self, capsys):
        reduce(INVERTIBLE_3x3).summary()
        out = capsys.readouterr().out
        assert 'Determinant: 4.000000' in out
        assert 'Inverse:' in out

    def test_summary_singular(self, capsys):
        reduce([[1, 2], [2, 4]]).summary()
        out = capsys.readouterr().out
        assert 'Inverse: does not exist (singular)' in out
