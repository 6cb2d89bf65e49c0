"""複素数配列（実部・虚部を交互に並べた浮動小数点バッファで保持するアクセサ配列）。

バッファのレイアウト:
    [re0, im0, re1, im1, ...]
    要素 i は buffer[2*i], buffer[2*i+1] の組で表される。

要素は get(i) で Python の complex として読み、set(value, i) で書く。
直接添字（x[i]）は提供しないため、count_if はアクセサ戦略で走査する。
"""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np


class _InterleavedComplexArray:
    """交互配置バッファ上の複素数配列（Complex128Array/Complex64Array の共通部分）。"""

    # サブクラスでバッファの dtype を指定する。
    _float_dtype: Any = np.float64
    _complex_dtype: Any = np.complex128

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._buffer = self._to_buffer(values)

    @classmethod
    def _to_buffer(cls, values: Iterable[Any]) -> np.ndarray:
        # 複素数配列からの構築はバッファを dtype 変換してコピーする。
        if isinstance(values, _InterleavedComplexArray):
            return values.buffer.astype(cls._float_dtype, copy=True)

        items = list(values)
        if not items:
            return np.zeros(0, dtype=cls._float_dtype)

        # 複素数の列として渡された場合は実部・虚部に展開する。
        if any(isinstance(v, (complex, np.complexfloating)) for v in items):
            data = np.asarray(items, dtype=cls._complex_dtype)
            buffer = np.empty(2 * data.size, dtype=cls._float_dtype)
            buffer[0::2] = data.real
            buffer[1::2] = data.imag
            return buffer

        buffer = np.asarray(items, dtype=cls._float_dtype)
        if buffer.ndim != 1:
            raise ValueError("values は 1 次元である必要があります")
        if buffer.size % 2 != 0:
            raise ValueError(
                "実部・虚部を交互に並べた入力の長さは偶数である必要があります"
            )
        return buffer.copy()

    def __len__(self) -> int:
        return self._buffer.size // 2

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_numpy().tolist()!r})"

    @property
    def buffer(self) -> np.ndarray:
        """交互配置バッファ（コピーではなくビュー）。"""

        return self._buffer

    def get(self, i: int) -> complex:
        """i 番目の要素を complex で返す。負の添字・範囲外は IndexError。"""

        self._check_index(i)
        return complex(float(self._buffer[2 * i]), float(self._buffer[2 * i + 1]))

    def set(self, value: Any, i: int) -> None:
        """i 番目の要素を value（実数または複素数）に置き換える。"""

        self._check_index(i)
        z = complex(value)
        self._buffer[2 * i] = z.real
        self._buffer[2 * i + 1] = z.imag

    def to_numpy(self) -> np.ndarray:
        """複素数の numpy 配列（コピー）を返す。"""

        out = np.empty(len(self), dtype=self._complex_dtype)
        out.real = self._buffer[0::2]
        out.imag = self._buffer[1::2]
        return out

    def _check_index(self, i: int) -> None:
        n = len(self)
        if i < 0 or i >= n:
            raise IndexError(f"index out of range: {i} (length={n})")


class Complex128Array(_InterleavedComplexArray):
    """倍精度（float64 の組）複素数配列。"""

    _float_dtype = np.float64
    _complex_dtype = np.complex128


class Complex64Array(_InterleavedComplexArray):
    """単精度（float32 の組）複素数配列。"""

    _float_dtype = np.float32
    _complex_dtype = np.complex64
