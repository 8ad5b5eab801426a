"""Configuration for pytest test suite."""

import os
import sys

import jax

# Add the parent directory to sys.path to enable imports from the unitarax package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Isometry and anti-Hermitian tolerances below 1e-10 need double precision
jax.config.update("jax_enable_x64", True)
