"""Test per perfstat/validation.py - il livello che protegge fast_table()."""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd
import pytest

from perfstat.tabulate import fast_table
from perfstat.validation import TabulationInputError, checked_table, validate_pair


class TestValidatePair:
    """Test per validate_pair()."""

    def test_valid_arrays_pass(self, small_pair):
        a, b = small_pair
        arr_a, arr_b = validate_pair(a, b)

        assert arr_a.dtype == np.int64
        assert arr_b.dtype == np.int64
        np.testing.assert_array_equal(arr_a, a)

    def test_python_int_lists_pass(self):
        arr_a, arr_b = validate_pair([1, 2, 3], [4, 5, 6])
        assert arr_a.tolist() == [1, 2, 3]
        assert arr_b.dtype == np.int64

    def test_smaller_int_dtypes_are_widened(self):
        arr_a, _ = validate_pair(np.array([1, 2], dtype=np.int8), np.array([3, 4], dtype=np.uint16))
        assert arr_a.dtype == np.int64

    def test_empty_pair_passes(self):
        arr_a, arr_b = validate_pair([], [])
        assert arr_a.size == 0 and arr_b.size == 0

    def test_length_mismatch(self):
        with pytest.raises(TabulationInputError, match="lunghezza diversa"):
            validate_pair([1, 2, 3], [1, 2])

    def test_float_dtype_rejected(self):
        with pytest.raises(TabulationInputError, match="dtype intero"):
            validate_pair(np.array([1.0, 2.0]), np.array([1, 2]))

    def test_nan_rejected(self):
        with pytest.raises(TabulationInputError, match="mancanti"):
            validate_pair(np.array([1.0, np.nan]), np.array([1, 2]))

    def test_none_rejected(self):
        with pytest.raises(TabulationInputError, match="mancanti"):
            validate_pair([1, None, 3], [1, 2, 3])

    def test_pd_na_rejected(self):
        with pytest.raises(TabulationInputError, match="mancanti"):
            validate_pair([1, 2, 3], [1, pd.NA, 3])

    def test_bool_rejected(self):
        with pytest.raises(TabulationInputError):
            validate_pair(np.array([True, False]), np.array([1, 2]))

    def test_strings_rejected(self):
        with pytest.raises(TabulationInputError):
            validate_pair(["a", "b"], [1, 2])

    def test_mixed_object_rejected(self):
        with pytest.raises(TabulationInputError, match="non interi"):
            validate_pair(np.array([1, "x"], dtype=object), [1, 2])

    def test_matrix_rejected(self):
        with pytest.raises(TabulationInputError, match="1-D"):
            validate_pair(np.ones((2, 2), dtype=int), np.ones((2, 2), dtype=int))

    def test_error_is_value_error(self):
        """I chiamanti che intercettano ValueError restano compatibili."""
        with pytest.raises(ValueError):
            validate_pair([1], [1, 2])


class TestCheckedTable:
    """Test per checked_table()."""

    def test_same_result_as_fast_table(self, rng):
        a = rng.integers(0, 8, size=400)
        b = rng.integers(0, 5, size=400)
        assert checked_table(a, b).equals(fast_table(a, b))

    def test_rejection_is_logged(self, caplog):
        logger = logging.getLogger("perfstat")
        logger.addHandler(caplog.handler)
        try:
            with caplog.at_level(logging.WARNING, logger="perfstat.validation"):
                with pytest.raises(TabulationInputError):
                    checked_table([1, 2], [1.5, 2.5])
        finally:
            logger.removeHandler(caplog.handler)

        assert any("Input rifiutato" in rec.getMessage() for rec in caplog.records)


class TestInt64Range:
    """Valori che non entrano in int64 vanno rifiutati, non troncati."""

    def test_uint64_above_int64_max_rejected(self):
        with pytest.raises(TabulationInputError, match="range int64"):
            validate_pair(np.array([2**63 + 5], dtype=np.uint64), np.array([1]))

    def test_uint64_within_range_passes(self):
        arr_a, _ = validate_pair(np.array([0, 2**63 - 1], dtype=np.uint64), np.array([1, 2]))
        assert arr_a.tolist() == [0, 2**63 - 1]

    def test_huge_python_int_rejected(self):
        with pytest.raises(TabulationInputError, match="range int64"):
            validate_pair([1, 2**70], [1, 2])

    def test_checked_table_does_not_wrap_labels(self):
        with pytest.raises(TabulationInputError):
            checked_table(np.array([1, 2**64 - 1], dtype=np.uint64), np.array([0, 0]))
