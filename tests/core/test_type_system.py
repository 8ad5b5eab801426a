"""Tests for array type aliases and scalar validation."""

import jax.numpy as jnp
import numpy as np
import pytest

from unitarax.core.type_system import is_real_scalar


class TestRealScalars:
    @pytest.mark.parametrize("value", [1, 0.5, -2.0, np.float32(1.5), np.int64(3), jnp.array(0.25)])
    def test_accepted(self, value):
        assert is_real_scalar(value)

    @pytest.mark.parametrize("value", [1 + 2j, True, "2", None, jnp.ones(2), jnp.array(1.0 + 1.0j), np.ones(1)])
    def test_rejected(self, value):
        assert not is_real_scalar(value)
