"""アクセサ配列（get/set で要素を読み書きする配列）のユーティリティ。

目的:
    添字アクセス x[i] ではなく x.get(i) で要素を読む必要がある配列を判定し、
    配列の表現に応じた getter を一度だけ解決できるようにする。

設計意図:
    - 判定は構造的に行う（get/set を持てばアクセサ配列とみなす）。継承は要求しない。
    - getter の解決は dtype 名をキーにした表引きにまとめ、型の追加をこの表だけで済ませる。
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import numpy as np

from .types import ArrayLike, Getter


def is_accessor_array(x: Any) -> bool:
    """x がアクセサ配列（callable な get と set を持つ）かを返す。"""

    return callable(getattr(x, "get", None)) and callable(getattr(x, "set", None))


def _get_accessor(x: ArrayLike, i: int) -> Any:
    return x.get(i)


def _get_generic(x: ArrayLike, i: int) -> Any:
    return x[i]


def _get_float(x: np.ndarray, i: int) -> float:
    return float(x[i])


def _get_int(x: np.ndarray, i: int) -> int:
    return int(x[i])


def _get_bool(x: np.ndarray, i: int) -> bool:
    return bool(x[i])


def _get_complex(x: np.ndarray, i: int) -> complex:
    return complex(x[i])


# dtype 名 -> getter。ここに無い dtype は汎用 getter（x[i]）にフォールバックする。
GETTERS: Dict[str, Getter] = {
    "float64": _get_float,
    "float32": _get_float,
    "float16": _get_float,
    "int64": _get_int,
    "int32": _get_int,
    "int16": _get_int,
    "int8": _get_int,
    "uint64": _get_int,
    "uint32": _get_int,
    "uint16": _get_int,
    "uint8": _get_int,
    "bool": _get_bool,
    "complex128": _get_complex,
    "complex64": _get_complex,
    "generic": _get_generic,
}


def resolve_getter(x: ArrayLike) -> Getter:
    """配列の表現に応じた getter を返す。

    Args:
        x: 入力配列。アクセサ配列・numpy.ndarray・一般のシーケンスのいずれか。

    Returns:
        (array, index) を受け取り要素を返す関数。
        - アクセサ配列: x.get(i)
        - numpy.ndarray: dtype に対応する getter（Python スカラーを返す）
        - それ以外: x[i]
    """

    if is_accessor_array(x):
        return _get_accessor
    dtype = getattr(x, "dtype", None)
    if dtype is None:
        return GETTERS["generic"]
    return GETTERS.get(np.dtype(dtype).name, GETTERS["generic"])


class AccessorArray:
    """シーケンスをアクセサ配列として見せるラッパ。

    要素は get(i) で読み、set(value, i) で書く。
    元のシーケンスはコピーせずに参照する（list なら set は元の list を書き換える）。
    """

    def __init__(self, values: Iterable[Any]) -> None:
        if not hasattr(values, "__getitem__") or not hasattr(values, "__len__"):
            values = list(values)
        self._data = values

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"AccessorArray({list(self._data)!r})"

    def get(self, i: int) -> Any:
        """i 番目の要素を返す。負の添字・範囲外は IndexError。"""

        self._check_index(i)
        return self._data[i]

    def set(self, value: Any, i: int) -> None:
        """i 番目の要素を value に置き換える。"""

        self._check_index(i)
        self._data[i] = value

    def tolist(self) -> List[Any]:
        return [self._data[i] for i in range(len(self._data))]

    def _check_index(self, i: int) -> None:
        if i < 0 or i >= len(self._data):
            raise IndexError(f"index out of range: {i} (length={len(self._data)})")


def to_accessor_array(x: Any) -> Any:
    """x をアクセサ配列に変換する。既にアクセサ配列なら x をそのまま返す。"""

    if is_accessor_array(x):
        return x
    return AccessorArray(x)
