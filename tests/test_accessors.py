from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from countif.accessors import (
    AccessorArray,
    is_accessor_array,
    resolve_getter,
    to_accessor_array,
)
from countif.complex_array import Complex64Array, Complex128Array


def expect_raises(exc_type, fn, name: str) -> None:
    try:
        fn()
    except exc_type:
        return
    raise AssertionError(f"{name}: {exc_type.__name__} expected")


def test_is_accessor_array() -> None:
    if not is_accessor_array(AccessorArray([1, 2])):
        raise AssertionError("AccessorArray must be detected")
    if not is_accessor_array(Complex128Array([1.0, 2.0])):
        raise AssertionError("Complex128Array must be detected")
    # dict は get を持つが set を持たないので直接添字側に振り分けられる。
    for x in ([1, 2], (1, 2), np.zeros(2), {"get": 1}, "ab"):
        if is_accessor_array(x):
            raise AssertionError(f"{type(x).__name__} must not be an accessor array")

    class GetOnly:
        def get(self, i):
            return i

    if is_accessor_array(GetOnly()):
        raise AssertionError("get without set must not be an accessor array")


def test_to_accessor_array() -> None:
    x = AccessorArray([1, 2, 3])
    if to_accessor_array(x) is not x:
        raise AssertionError("accessor arrays must be returned unchanged")

    data = [1, 2, 3]
    wrapped = to_accessor_array(data)
    wrapped.set(9, 0)
    if data[0] != 9:
        raise AssertionError("set must write through to the wrapped list")
    if wrapped.tolist() != [9, 2, 3] or len(wrapped) != 3:
        raise AssertionError(f"unexpected contents: {wrapped!r}")

    from_gen = to_accessor_array(v * 2 for v in range(3))
    if from_gen.tolist() != [0, 2, 4]:
        raise AssertionError("iterables must be materialized")

    expect_raises(IndexError, lambda: wrapped.get(3), "get past end")
    expect_raises(IndexError, lambda: wrapped.get(-1), "negative get")
    expect_raises(IndexError, lambda: wrapped.set(0, 5), "set past end")


def test_resolve_getter() -> None:
    x = AccessorArray(["a", "b"])
    if resolve_getter(x)(x, 1) != "b":
        raise AssertionError("accessor getter")

    ints = np.array([3, 4], dtype=np.int16)
    v = resolve_getter(ints)(ints, 1)
    if v != 4 or type(v) is not int:
        raise AssertionError(f"int16 getter must return int, got {v!r}")

    floats = np.array([0.5, 1.5], dtype=np.float32)
    v = resolve_getter(floats)(floats, 0)
    if v != 0.5 or type(v) is not float:
        raise AssertionError(f"float32 getter must return float, got {v!r}")

    cplx = np.array([1 + 2j], dtype=np.complex64)
    v = resolve_getter(cplx)(cplx, 0)
    if v != 1 + 2j or type(v) is not complex:
        raise AssertionError(f"complex64 getter must return complex, got {v!r}")

    for dtype, expected_type in [
        (np.int64, int),
        (np.uint64, int),
        (np.float16, float),
    ]:
        arr = np.array([1, 2], dtype=dtype)
        v = resolve_getter(arr)(arr, 1)
        if v != 2 or type(v) is not expected_type:
            raise AssertionError(f"{np.dtype(dtype).name} getter returned {v!r}")

    default_ints = np.array([1, 2])
    if type(resolve_getter(default_ints)(default_ints, 0)) is not int:
        raise AssertionError("default integer dtype must return int")

    flags = np.array([True, False])
    if resolve_getter(flags)(flags, 1) is not False:
        raise AssertionError("bool getter")

    seq = ("x", "y")
    if resolve_getter(seq)(seq, 0) != "x":
        raise AssertionError("generic getter")

    objs = np.array(["p", "q"], dtype=object)
    if resolve_getter(objs)(objs, 1) != "q":
        raise AssertionError("unknown dtype must fall back to generic getter")


def test_complex_array() -> None:
    x = Complex128Array([0.0, 0.0, 1.0, 0.0, 3.0, 4.0, 0.0, 5.0])
    if len(x) != 4:
        raise AssertionError(f"length: {len(x)}")
    if x.get(2) != 3 + 4j:
        raise AssertionError(f"get: {x.get(2)}")
    x.set(-1 + 2j, 0)
    if x.get(0) != -1 + 2j or x.buffer[0] != -1.0 or x.buffer[1] != 2.0:
        raise AssertionError("set must update the interleaved buffer")
    x.set(7, 1)
    if x.get(1) != 7 + 0j:
        raise AssertionError("real values must be stored with zero imaginary part")

    expected = np.array([-1 + 2j, 7 + 0j, 3 + 4j, 5j], dtype=np.complex128)
    if not np.array_equal(x.to_numpy(), expected):
        raise AssertionError(f"to_numpy: {x.to_numpy()}")

    y = Complex64Array([1 + 1j, 2 - 3j])
    if y.buffer.dtype != np.float32 or y.to_numpy().dtype != np.complex64:
        raise AssertionError("Complex64Array must use single precision")
    if y.get(1) != 2 - 3j:
        raise AssertionError(f"complex64 get: {y.get(1)}")

    copied = Complex128Array(x)
    if copied.get(2) != 3 + 4j or len(copied) != len(x):
        raise AssertionError("construction from a complex array")
    copied.set(0, 2)
    if x.get(2) != 3 + 4j:
        raise AssertionError("copy must not share the source buffer")
    narrowed = Complex64Array(Complex128Array([1 + 2j]))
    if narrowed.buffer.dtype != np.float32 or narrowed.get(0) != 1 + 2j:
        raise AssertionError("construction across precisions")

    if len(Complex128Array()) != 0:
        raise AssertionError("empty complex array")

    expect_raises(ValueError, lambda: Complex128Array([1.0, 2.0, 3.0]), "odd length")
    expect_raises(ValueError, lambda: Complex128Array([[1.0, 2.0]]), "2-D input")
    expect_raises(IndexError, lambda: x.get(4), "get past end")
    expect_raises(IndexError, lambda: x.get(-1), "negative get")


def main() -> None:
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("OK: accessor tests passed")


if __name__ == "__main__":
    main()
