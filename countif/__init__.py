"""countif パッケージ。

外部に公開する API（count_if とアクセサ配列・複素数配列）をここで再エクスポートする。
利用者は基本的に `from countif import count_if` の形で import できる。
"""

from .accessors import AccessorArray, is_accessor_array, resolve_getter, to_accessor_array
from .complex_array import Complex64Array, Complex128Array
from .core import count_if

# __all__:
# - `from countif import *` の対象を明示する。
# - frame/config/logger などの CLI 向けコンポーネントは含めない。
__all__ = [
    "AccessorArray",
    "Complex64Array",
    "Complex128Array",
    "count_if",
    "is_accessor_array",
    "resolve_getter",
    "to_accessor_array",
]
