import operator

from ndlayout import env
from ndlayout.dtype import element_size
from ndlayout.errors import DimensionMismatchError
from ndlayout.utils.math import prod


def row_major_strides(shape):
  return tuple(prod(shape[i+1:]) for i in range(len(shape)))

def col_major_strides(shape):
  return tuple(prod(shape[:i]) for i in range(len(shape)))

def to_coordinates(flat_index, shape):
  """Decompose `flat_index` into per-dimension coordinates, last dimension varying fastest.

  The strides are implied by `shape` (row-major), so this only inverts `to_flat_index`
  when the latter is given `row_major_strides(shape)`. Transposed or expanded strides
  are legal there and address a different element.
  """
  if env.BOUNDS_CHECK and not 0 <= flat_index < prod(shape):
    raise IndexError(f"flat index {flat_index} is out of bounds for shape {tuple(shape)}")
  coords = [0] * len(shape)
  for i in range(len(shape)-1, -1, -1):
    coords[i] = flat_index % shape[i]
    flat_index //= shape[i]
  return tuple(coords)

def to_flat_index(coords, strides):
  if len(coords) != len(strides):
    raise DimensionMismatchError(coords, strides)
  return sum(operator.index(c) * operator.index(s) for c, s in zip(coords, strides))

def byte_strides(strides, kind):
  itemsize = element_size(kind)
  return tuple(s * itemsize for s in strides)

def nbytes(shape, kind):
  return prod(shape) * element_size(kind)
