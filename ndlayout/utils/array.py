import functools

from ndlayout.env import DEBUG
from ndlayout.errors import (DimensionMismatchError, InvalidSizeError, ShapeIncompatibilityError,
                             ShapeMismatchError)
from ndlayout.utils.math import prod


def broadcast_shapes(shape1, shape2):
  # https://numpy.org/doc/stable/user/basics.broadcasting.html
  ndim = max(len(shape1), len(shape2))
  ret = [0] * ndim
  for i in range(1, ndim+1):
    dim1 = shape1[-i] if i <= len(shape1) else 1
    dim2 = shape2[-i] if i <= len(shape2) else 1
    if dim1 != dim2 and dim1 != 1 and dim2 != 1:
      raise ShapeIncompatibilityError(shape1, shape2)
    ret[-i] = max(dim1, dim2)
  if DEBUG:
    print(f"[DEBUG] broadcast {tuple(shape1)} with {tuple(shape2)} -> {tuple(ret)}")
  return tuple(ret)

def normalize_shape(shape):
  # NOTE: validation pass-through only, no padding against another shape
  if any(d <= 0 for d in shape):
    raise InvalidSizeError(shape)
  return tuple(shape)

def broadcast_all(*shapes):
  return functools.reduce(broadcast_shapes, shapes, ())

def broadcast_strides(shape, strides, target_shape):
  if len(shape) != len(strides):
    raise DimensionMismatchError(shape, strides)
  target_shape = tuple(target_shape)
  if len(shape) > len(target_shape) or broadcast_shapes(shape, target_shape) != target_shape:
    raise ShapeIncompatibilityError(shape, target_shape)
  pad = len(target_shape) - len(shape)
  expanded = (0 if d != t else s for d, s, t in zip(shape, strides, target_shape[pad:]))
  return (0,) * pad + tuple(expanded)

def broadcast_index(out_index, in_shape):
  offset = len(out_index) - len(in_shape)
  if offset < 0:
    raise DimensionMismatchError(out_index, in_shape)
  return tuple(out_index[i+offset] if d > 1 else 0 for i, d in enumerate(in_shape))

def calculate_contiguity(shape, strides):
  # https://github.com/numpy/numpy/blob/93a97649aa0aefc0ee8ee5fc7cb78063bfe67255/numpy/core/src/multiarray/flagsobject.c#L115
  if len(shape) != len(strides):
    raise DimensionMismatchError(shape, strides)
  ndim = len(shape)
  c_contiguous = f_contiguous = True
  if ndim:
    nitems = 1
    for i in range(ndim-1, -1, -1):
      if shape[i] == 0:
        return True, True
      if shape[i] != 1:
        if strides[i] != nitems:
          c_contiguous = False
        nitems *= shape[i]
    nitems = 1
    for i in range(ndim):
      if shape[i] != 1:
        if strides[i] != nitems:
          f_contiguous = False
        nitems *= shape[i]
  return c_contiguous, f_contiguous

def calculate_slices(start, stop, step, length):
  # https://github.com/python/cpython/blob/d034590294d4618880375a6db513c30bce3e126b/Objects/sliceobject.c#L264
  if step is None: step = 1
  if step == 0:
    raise ValueError("slice step cannot be zero")
  if start is None: start = length+1 if step < 0 else 0
  if stop is None: stop = -length-1 if step < 0 else length+1

  if start < 0:
    start += length
    if start < 0: start = -1 if step < 0 else 0
  elif start >= length:
    start = length-1 if step < 0 else length
  if stop < 0:
    stop += length
    if stop < 0: stop = -1 if step < 0 else 0
  elif stop >= length:
    stop = length-1 if step < 0 else length

  if step < 0 and stop < start:
    size = (start - stop - 1) // (-step) + 1
  elif step > 0 and start < stop:
    size = (stop - start - 1) // (step) + 1
  else:
    size = 0
  return start, stop, step, size

def resolve_reshape(size, shape):
  shape = tuple(shape)
  unknown = [i for i, d in enumerate(shape) if d == -1]
  if len(unknown) > 1 or any(d < -1 for d in shape):
    raise InvalidSizeError(shape)
  ret = shape
  if unknown:
    known = prod(d for d in shape if d != -1)
    if known == 0 or size % known:
      raise ShapeMismatchError(size, shape)
    ret = tuple(size // known if d == -1 else d for d in shape)
  if prod(ret) != size:
    raise ShapeMismatchError(size, shape)
  if DEBUG and unknown:
    print(f"[DEBUG] reshape size={size} {shape} -> {ret}")
  return ret
