# linalg/config.py
"""
Centralized configuration for the linalg matrix library.
This module provides a single source of truth for all configurable parameters.
"""

import numpy as np

# Element type of every matrix
DTYPE = np.float64

# Rendering parameters
ZERO_TOLERANCE = 1e-8  # Magnitudes below this are printed as a single digit
COLUMN_SEPARATOR = " "
SHAPE_LABEL = "Shape"

# Root logger for the library
LOGGER_NAME = "linalg"
