"""pandas.DataFrame の列ごとに count_if を適用するヘルパ。

CLI（main.py）から利用する。列は to_numpy() で numpy 配列に変換してから数えるため、
DataFrame の index（ラベル）には依存しない。
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

import numpy as np
import pandas as pd
from tqdm.auto import tqdm

from .core import count_if


def select_columns(
    frame: pd.DataFrame, columns: Optional[Sequence[str]] = None
) -> list:
    """数える対象の列名を返す。

    columns が None の場合は数値列（複素数を含む）すべてを対象にする。

    Raises:
        ValueError: 指定された列が frame に存在しない場合。
    """

    if columns is None:
        return [
            col
            for col in frame.columns
            if pd.api.types.is_numeric_dtype(frame[col])
            or pd.api.types.is_complex_dtype(frame[col])
        ]
    missing = sorted(set(columns) - set(frame.columns))
    if missing:
        raise ValueError(f"Missing columns: {missing}")
    return list(columns)


def count_columns(
    frame: pd.DataFrame,
    predicate: Callable[..., Any],
    columns: Optional[Sequence[str]] = None,
    progress: bool = True,
) -> Dict[str, int]:
    """列ごとに述語を満たす要素数を数える。

    Returns:
        列名 -> 件数 の辞書（列の順序を保つ）。
    """

    counts: Dict[str, int] = {}
    for col in tqdm(
        select_columns(frame, columns),
        desc="count_if",
        leave=False,
        disable=not progress,
    ):
        values = np.asarray(frame[col].to_numpy())
        counts[col] = count_if(values, predicate)
    return counts


def summarize_counts(counts: Dict[str, int], length: int) -> pd.DataFrame:
    """件数を column/count/length/ratio の表にまとめる。"""

    rows = [
        {
            "column": col,
            "count": n,
            "length": length,
            "ratio": (n / length) if length > 0 else 0.0,
        }
        for col, n in counts.items()
    ]
    return pd.DataFrame(rows, columns=["column", "count", "length", "ratio"])
