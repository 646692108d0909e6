"""Evaluate whole tables of calculator expressions with pandas."""
import logging

import pandas as pd

from string_calculator import StringCalculator, StringCalculatorError

logger = logging.getLogger(__name__)


def evaluate_frame(df, column="expression"):
    """Return a copy of ``df`` with ``result`` and ``error`` columns added.

    Empty cells count as absent input. A row that fails keeps a missing
    result and the error class name; the other rows are still evaluated.
    """
    if column not in df.columns:
        raise KeyError(f"column {column!r} not found, available: {list(df.columns)}")

    calc = StringCalculator()
    results = []
    errors = []
    for index, row in df.iterrows():
        expression = row[column]
        if pd.isna(expression):
            expression = None
        try:
            results.append(calc.add(expression))
            errors.append(None)
        except StringCalculatorError as e:
            logger.warning("row %s: %s", index, e)
            results.append(None)
            errors.append(type(e).__name__)

    out = df.copy()
    # object keeps Python ints of any size; Int64 would overflow past 2**63 - 1
    out['result'] = pd.Series(results, index=df.index, dtype='object')
    out['error'] = pd.Series(errors, index=df.index, dtype='object')
    return out


def evaluate_csv(path, column="expression", output=None):
    # dtype=str keeps expressions such as "01" or "1:2" exactly as written.
    # Only empty cells are missing; "NA" or "null" are expressions like any other.
    df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])
    evaluated = evaluate_frame(df, column=column)
    if output is not None:
        evaluated.to_csv(output, index=False)
        logger.info("wrote %d rows to %s", len(evaluated), output)
    return evaluated


def summarize(evaluated):
    ok = evaluated['error'].isna()
    summary = {
        'rows': len(evaluated),
        'ok': int(ok.sum()),
        'failed': int((~ok).sum()),
        'total': sum(evaluated.loc[ok, 'result']),
    }
    logger.info("evaluated %(rows)d rows: %(ok)d ok, %(failed)d failed", summary)
    return summary
