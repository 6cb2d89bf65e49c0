"""型定義。

count_if が受け付ける配列・述語の型エイリアスをまとめる。
配列は list/tuple/numpy.ndarray/アクセサ配列のいずれもあり得るため、
ArrayLike は Any のままにしている。
"""

from typing import Any, Callable

# ArrayLike:
# - 「長さを持ち、位置で読める」入力を表す型。
# - 直接添字できるものとアクセサ配列の両方を含むため Any とする。
ArrayLike = Any

# Predicate: (value, index, array) -> 真偽値として評価できる値
Predicate = Callable[..., Any]

# Getter: (array, index) -> 要素
Getter = Callable[[Any, int], Any]
