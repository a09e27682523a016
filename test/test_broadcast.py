import numpy as np
import pytest

from ndlayout import (DimensionMismatchError, InvalidSizeError, ShapeError, ShapeIncompatibilityError,
                      ShapeMismatchError, broadcast_all, broadcast_index, broadcast_shapes, broadcast_strides,
                      calculate_contiguity, calculate_slices, normalize_shape, resolve_reshape)

np.random.seed(0)

def test_broadcast_shapes():
  assert broadcast_shapes([2, 3], [3]) == (2, 3)
  assert broadcast_shapes([8, 1, 6, 1], [7, 1, 5]) == (8, 7, 6, 5)
  for shape1, shape2 in (
          [(), (1, 2, 3, 4)],
          [(1,), (1, 2, 3, 4)],
          [(1, 1, 1, 1), (1, 2, 3, 4)],
          [(4,), (1, 2, 3, 4)],
          [(3, 1), (1, 2, 3, 4)],
          [(1, 3, 1), (1, 2, 3, 4)],
          [(1, 2, 1, 1), (1, 2, 3, 4)],
          [(5, 1, 4), (3, 1)],
          [(1,), (1,)],
          [(), ()]):
    expect = np.broadcast_shapes(shape1, shape2)
    assert broadcast_shapes(shape1, shape2) == expect
    assert broadcast_shapes(shape2, shape1) == expect

def test_broadcast_shapes_random():
  for _ in range(200):
    ndim1, ndim2 = np.random.randint(0, 5, size=2)
    shape1 = tuple(int(d) for d in np.random.randint(1, 4, size=ndim1))
    shape2 = tuple(int(d) for d in np.random.randint(1, 4, size=ndim2))
    try:
      expect = np.broadcast_shapes(shape1, shape2)
    except ValueError:
      with pytest.raises(ShapeIncompatibilityError):
        broadcast_shapes(shape1, shape2)
      continue
    assert broadcast_shapes(shape1, shape2) == expect
    assert all(isinstance(d, int) for d in broadcast_shapes(shape1, shape2))

def test_broadcast_shapes_incompatible():
  with pytest.raises(ShapeIncompatibilityError) as excinfo:
    broadcast_shapes([3, 4], [4, 3])
  assert excinfo.value.shapes == ((3, 4), (4, 3))
  assert "(3, 4) and (4, 3)" in str(excinfo.value)
  # operands are reported in the order received
  with pytest.raises(ShapeIncompatibilityError) as excinfo:
    broadcast_shapes((4, 3), (2, 3, 4))
  assert excinfo.value.shapes == ((4, 3), (2, 3, 4))
  assert isinstance(excinfo.value, ValueError)

def test_normalize_shape():
  assert normalize_shape([3, 4]) == (3, 4)
  assert normalize_shape((1, 1, 7)) == (1, 1, 7)
  assert normalize_shape(()) == ()
  for shape in ([3, 0, 2], [0], [2, -1]):
    with pytest.raises(InvalidSizeError) as excinfo:
      normalize_shape(shape)
    assert excinfo.value.shape == tuple(shape)
    assert isinstance(excinfo.value, ShapeError)

def test_broadcast_all():
  for shapes in (
          [],
          [(2, 3)],
          [(2, 1), (1, 3), (4, 1, 1)],
          [(1,), (5, 1), (), (2, 1, 1)]):
    assert broadcast_all(*shapes) == np.broadcast_shapes(*shapes)
  with pytest.raises(ShapeIncompatibilityError):
    broadcast_all((2, 1), (1, 3), (2, 4))

def test_broadcast_strides():
  shape = (3, 1)
  nparr = np.arange(3).reshape(shape)
  for target in ((3, 4), (2, 3, 4), (3, 1), (5, 1, 3, 7)):
    npview = np.broadcast_to(nparr, target)
    strides = broadcast_strides(shape, (1, 1), target)
    # the stride of a size-1 dim is never used for addressing, numpy may report it as 0
    for d, s, nps in zip(target, strides, npview.strides):
      if d != 1:
        assert s == nps // nparr.itemsize
  assert broadcast_strides(shape, (1, 1), (2, 3, 4)) == (0, 1, 0)
  with pytest.raises(ShapeIncompatibilityError):
    broadcast_strides((3, 1), (1, 1), (4, 4))
  with pytest.raises(ShapeIncompatibilityError):
    broadcast_strides((2, 3), (3, 1), (3,))
  with pytest.raises(DimensionMismatchError):
    broadcast_strides((2, 3), (1,), (2, 3))

def test_broadcast_index():
  assert broadcast_index((1, 2, 3), (3, 4)) == (2, 3)
  assert broadcast_index((1, 2, 3), (1, 4)) == (0, 3)
  assert broadcast_index((1, 2, 3), (3, 1)) == (2, 0)
  assert broadcast_index((1, 2), ()) == ()
  with pytest.raises(DimensionMismatchError):
    broadcast_index((1,), (2, 2))

def test_calculate_contiguity():
  shape = (2, 3, 4)
  nparr = np.arange(np.prod(shape)).reshape(shape)
  for npview in (nparr, nparr.T, nparr.transpose((0, 2, 1)), nparr[:, ::2], nparr[1:], nparr[:, :1, :1],
                 nparr[:, :0], np.broadcast_to(nparr[:1], shape)):
    strides = tuple(s // nparr.itemsize for s in npview.strides)
    c, f = calculate_contiguity(npview.shape, strides)
    assert c == npview.flags.c_contiguous
    assert f == npview.flags.f_contiguous
  assert calculate_contiguity((), ()) == (True, True)
  with pytest.raises(DimensionMismatchError):
    calculate_contiguity((2, 3), (1,))

def test_calculate_slices():
  length = 7
  for key in (slice(None), slice(1, 5), slice(None, None, 2), slice(None, None, -1), slice(-3, None),
              slice(5, 1, -2), slice(10, -10, -1), slice(4, 2), slice(-100, 100, 3)):
    start, stop, step, size = calculate_slices(key.start, key.stop, key.step, length)
    expect = list(range(length))[key]
    assert size == len(expect)
    assert [start + i * step for i in range(size)] == expect
  with pytest.raises(ValueError):
    calculate_slices(0, 3, 0, length)

def test_resolve_reshape():
  assert resolve_reshape(24, (3, -1)) == (3, 8)
  assert resolve_reshape(24, (-1,)) == (24,)
  assert resolve_reshape(24, (1, 2, 3, 4)) == (1, 2, 3, 4)
  assert resolve_reshape(0, (0, 3)) == (0, 3)
  assert resolve_reshape(1, ()) == ()
  with pytest.raises(ShapeMismatchError) as excinfo:
    resolve_reshape(24, (5, -1))
  assert excinfo.value.size == 24
  with pytest.raises(ShapeMismatchError):
    resolve_reshape(24, (4, 5))
  with pytest.raises(ShapeMismatchError):
    resolve_reshape(0, (0, -1))
  for shape in ((-1, -1), (2, -3)):
    with pytest.raises(InvalidSizeError):
      resolve_reshape(24, shape)

def test_debug_trace(monkeypatch, capsys):
  import ndlayout.utils.array as array_utils
  monkeypatch.setattr(array_utils, "DEBUG", 1)
  broadcast_shapes((2, 1), (3,))
  resolve_reshape(6, (-1, 2))
  out = capsys.readouterr().out
  assert "[DEBUG] broadcast (2, 1) with (3,) -> (2, 3)" in out
  assert "[DEBUG] reshape size=6 (-1, 2) -> (3, 2)" in out
