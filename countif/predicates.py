"""設定ファイルから組み立てる宣言的な述語。

config の想定:
    - "op": 比較演算子（">", ">=", "<", "<=", "==", "!="）または
      "between" / "nonzero" / "finite" / "isnan"
    - "value": 比較演算子のしきい値
    - "low", "high": between の下限・上限（両端を含む）
    - "part": 複素数に対する評価対象（"real" / "imag" / "abs"）。省略時は値そのもの
"""

from __future__ import annotations

import math
import operator
from typing import Any, Callable, Dict, Mapping, Optional

_COMPARISONS: Dict[str, Callable[[Any, Any], Any]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
}

_PARTS: Dict[str, Callable[[Any], Any]] = {
    "real": lambda v: complex(v).real,
    "imag": lambda v: complex(v).imag,
    "abs": abs,
}


def _normalize_op(op: Any) -> str:
    if op is None:
        raise ValueError("predicate の op が指定されていません")
    return str(op).strip().lower()


def _require(spec: Mapping[str, Any], key: str, op: str) -> float:
    if key not in spec:
        raise ValueError(f"op={op!r} には {key!r} が必要です")
    return float(spec[key])


def _resolve_part(part: Optional[str]) -> Callable[[Any], Any]:
    if part is None:
        return lambda v: v
    name = str(part).strip().lower()
    if name not in _PARTS:
        raise ValueError(f"未知の part が指定されました: {part!r}")
    return _PARTS[name]


def make_predicate(spec: Mapping[str, Any]) -> Callable[[Any], bool]:
    """設定辞書から 1 引数の述語を組み立てる。

    Args:
        spec: {"op": ">", "value": 0} のような辞書。

    Returns:
        要素を受け取り bool を返す関数。

    Raises:
        ValueError: op が未知、しきい値が不足、または part が未知の場合。
    """

    op = _normalize_op(spec.get("op"))
    part = _resolve_part(spec.get("part"))

    if op in _COMPARISONS:
        compare = _COMPARISONS[op]
        threshold = _require(spec, "value", op)
        return lambda v: bool(compare(part(v), threshold))

    if op == "between":
        low = _require(spec, "low", op)
        high = _require(spec, "high", op)
        if low > high:
            raise ValueError("between の low は high 以下である必要があります")
        return lambda v: bool(low <= part(v) <= high)

    if op == "nonzero":
        return lambda v: bool(part(v) != 0)

    if op == "finite":
        return lambda v: _is_finite(part(v))

    if op == "isnan":
        return lambda v: _is_nan(part(v))

    raise ValueError(f"未知の op が指定されました: {op!r}")


def _is_finite(v: Any) -> bool:
    if isinstance(v, complex):
        return math.isfinite(v.real) and math.isfinite(v.imag)
    return math.isfinite(float(v))


def _is_nan(v: Any) -> bool:
    if isinstance(v, complex):
        return math.isnan(v.real) or math.isnan(v.imag)
    return math.isnan(float(v))


def all_of(*predicates: Callable[[Any], Any]) -> Callable[[Any], bool]:
    """すべての述語を満たすときに True を返す述語（論理積）。"""

    return lambda v: all(p(v) for p in predicates)
