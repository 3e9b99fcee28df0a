"""Constants for CPI aggregation and inflation splicing."""

# Index parameters
BASE_INDEX_VALUE = 100.0  # Reference value for chained indices
MONTHS_PER_YEAR = 12  # Lag used for year-over-year variations

# Classification hierarchy
DEFAULT_CHARACTERS = (3, 4, 5, 7)  # division, group, subgroup, item
ROOT_CODE = "_0"  # Code of the synthetic root node
ROOT_NAME = "IPC"  # Label of the synthetic root node
GROUP_PLACEHOLDER = "Group: {code}"  # Label for groups missing from the vocabulary

# Splicing
SPLICE_SEPARATOR = "--"  # Joins constituent names of a splice
COMBINATION_TAG = "COMBFN"  # Default tag of a measure combination

# Numerical tolerances
WEIGHT_TOLERANCE = 1e-6  # Weight-sum consistency checks
