"""Data validation schemas using Pandera for CPI description tables."""

import pandas as pd
import pandera.pandas as pa


# Elementary item description table: one row per item of a CPI base
item_schema = pa.DataFrameSchema({
    "code": pa.Column(
        str,
        nullable=False,
        unique=True,
        checks=[
            pa.Check.str_length(min_value=1)
        ],
        description="Classification code of the elementary item"
    ),
    "name": pa.Column(
        str,
        nullable=False,
        description="Description of the elementary item"
    ),
    "weight": pa.Column(
        float,
        nullable=False,
        coerce=True,
        checks=[
            pa.Check.greater_than_or_equal_to(0)
        ],
        description="Share of the item in the consumption basket"
    )
})


# Group vocabulary: codes and names of every non-leaf node. A repeated code
# keeps the name of its first row when the tree is built.
group_schema = pa.DataFrameSchema({
    "code": pa.Column(
        str,
        nullable=False,
        description="Classification code of the group"
    ),
    "name": pa.Column(
        str,
        nullable=False,
        description="Description of the group"
    )
})


def _positional(df: pd.DataFrame, columns: list) -> pd.DataFrame:
    """Rename the leading columns of ``df`` by position."""
    if df.shape[1] < len(columns):
        raise ValueError(
            f"Expected at least {len(columns)} columns ({', '.join(columns)}), "
            f"got {df.shape[1]}"
        )
    out = df.iloc[:, :len(columns)].copy()
    out.columns = columns
    return out


def validate_items(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate an item description table against schema.

    Only the order of the columns matters: code, name and weight.

    Parameters
    ----------
    df : pd.DataFrame
        Raw item description table

    Returns
    -------
    pd.DataFrame
        Validated table with columns ``code``, ``name`` and ``weight``

    Raises
    ------
    pa.errors.SchemaError
        If validation fails
    """
    return item_schema.validate(_positional(df, ["code", "name", "weight"]))


def validate_groups(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate a group vocabulary table against schema.

    Only the order of the columns matters: code and name.

    Parameters
    ----------
    df : pd.DataFrame
        Raw group vocabulary table

    Returns
    -------
    pd.DataFrame
        Validated table with columns ``code`` and ``name``

    Raises
    ------
    pa.errors.SchemaError
        If validation fails
    """
    return group_schema.validate(_positional(df, ["code", "name"]))
