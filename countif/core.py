"""述語を満たす要素数を数える count_if 本体。

配列の表現を一度だけ調べ、
    - 直接添字できる配列（list/tuple/numpy.ndarray など）は x[i] で
    - アクセサ配列（get/set を持つ配列）は解決済み getter で
走査する。どちらの戦略でも、同じ要素列に対しては同じ件数を返す。

入力検証は行わない。配列でない x や呼び出せない predicate は、
len()/添字/呼び出しの時点で Python が送出する例外（TypeError 等）がそのまま伝播する。
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable

from .accessors import is_accessor_array, resolve_getter
from .types import ArrayLike, Predicate

# this_arg の省略を表す番兵。None は実行コンテキストとして束縛する。
_UNBOUND = object()

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _bind(predicate: Predicate, this_arg: Any) -> Callable[..., Any]:
    if this_arg is _UNBOUND:
        return predicate
    # 実行コンテキストを第 1 引数（self）として束縛する。None も束縛対象に含む。
    return functools.partial(predicate, this_arg)


def _positional_arity(fn: Callable[..., Any]) -> int:
    """(value, index, array) のうち、fn に渡す引数の個数を返す。"""

    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # 組み込み関数などシグネチャが取れない場合は値だけを渡す。
        return 1
    n = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 3
        # 既定値つきの引数（lambda v, t=threshold: ...）には渡さない。
        if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty:
            n += 1
    return min(max(n, 1), 3)


def _indexed(x: ArrayLike, predicate: Callable[..., Any], arity: int) -> int:
    """直接添字 x[i] で走査し、述語を満たす要素数を返す。

    pandas.Series のようにラベルで添字する配列は iloc で位置を読む。
    """

    view = getattr(x, "iloc", x)

    n = 0
    for i in range(len(x)):
        if predicate(*(view[i], i, x)[:arity]):
            n += 1
    return n


def _accessors(x: ArrayLike, predicate: Callable[..., Any], arity: int) -> int:
    """解決済み getter で走査し、述語を満たす要素数を返す。"""

    get = resolve_getter(x)

    n = 0
    for i in range(len(x)):
        if predicate(*(get(x, i), i, x)[:arity]):
            n += 1
    return n


def count_if(x: ArrayLike, predicate: Predicate, this_arg: Any = _UNBOUND) -> int:
    """配列 x のうち predicate を満たす要素の個数を返す。

    Args:
        x: 入力配列。長さ 0 以上で、x[i] で読めるか get(i) を持つアクセサ配列。
            読み取り専用として扱う。
        predicate: (value, index, x) を受け取り真偽値として評価できる値を返す関数。
            既定値の無い位置引数の個数に合わせて先頭から渡す（例: lambda v: v > 0）。
        this_arg: 述語の実行コンテキスト。指定した場合は predicate の第 1 引数（self）
            として束縛され、(self, value, index, x) の形で呼ばれる。

    Returns:
        述語を満たした要素数（0 以上の int）。

    Example:
        >>> count_if([0, 1, 0, 1, 2], lambda v: v > 0)
        3
    """

    fn = _bind(predicate, this_arg)
    arity = _positional_arity(fn)
    if is_accessor_array(x):
        return _accessors(x, fn, arity)
    return _indexed(x, fn, arity)
