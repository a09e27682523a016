import numbers
import operator

from ndlayout.dtype import element_size
from ndlayout.errors import DimensionMismatchError, InvalidSizeError
from ndlayout.utils.array import broadcast_strides, calculate_contiguity, calculate_slices, resolve_reshape
from ndlayout.utils.index import col_major_strides, row_major_strides, to_coordinates, to_flat_index
from ndlayout.utils.math import prod


class Layout:
  """Strided view over a linear buffer: shape, element strides and a base offset.

  View operations never touch data, they return a new Layout addressing the same buffer.
  """
  def __init__(self, shape, strides=None, offset=0):
    shape = tuple(shape)
    if any(d < 0 for d in shape):
      raise InvalidSizeError(shape)
    strides = row_major_strides(shape) if strides is None else tuple(strides)
    if len(strides) != len(shape):
      raise DimensionMismatchError(shape, strides)
    self.shape, self.strides, self.offset = shape, strides, offset
    self.c_contiguous, self.f_contiguous = calculate_contiguity(self.shape, self.strides)

  def __repr__(self):
    return f"<Layout shape={self.shape} strides={self.strides} offset={self.offset}>"

  def __eq__(self, other):
    if not isinstance(other, Layout):
      return NotImplemented
    return (self.shape, self.strides, self.offset) == (other.shape, other.strides, other.offset)

  def __hash__(self):
    return hash((self.shape, self.strides, self.offset))

  @property
  def ndim(self):
    return len(self.shape)

  @property
  def size(self):
    return prod(self.shape)

  def nbytes(self, kind):
    return self.size * element_size(kind)

  def flat_index(self, coords):
    coords = tuple(coords)
    if len(coords) != self.ndim:
      raise DimensionMismatchError(coords, self.strides)
    for i, (c, d) in enumerate(zip(coords, self.shape)):
      if not 0 <= c < d:
        raise IndexError(f"index {c} is out of bounds for axis {i} with size {d}")
    return self.offset + to_flat_index(coords, self.strides)

  def coordinates(self, flat_index):
    return to_coordinates(flat_index, self.shape)

  def offsets(self):
    # buffer offsets of every element in row-major logical order
    for i in range(self.size):
      yield self.flat_index(self.coordinates(i))

  # ##### View Ops #####
  def expand(self, shape):
    # size-1 dims stretch to max(1, d), so zero-size targets are rejected
    shape = tuple(shape)
    return Layout(shape, broadcast_strides(self.shape, self.strides, shape), self.offset)

  broadcast_to = expand

  def reshape(self, shape):
    shape = resolve_reshape(self.size, shape)
    if self.c_contiguous:
      strides = row_major_strides(shape)
    elif self.f_contiguous:
      strides = col_major_strides(shape)
    else:
      raise ValueError(f"Cannot reshape non-contiguous {self!r} without a copy")
    return Layout(shape, strides, self.offset)

  def permute(self, axes):
    axes = tuple(a + self.ndim if a < 0 else a for a in axes)
    if sorted(axes) != list(range(self.ndim)):
      raise ValueError(f"Invalid axes {axes} for {self.ndim}-dimensional layout")
    return Layout(tuple(self.shape[a] for a in axes), tuple(self.strides[a] for a in axes), self.offset)

  @property
  def T(self):
    return self.permute(tuple(range(self.ndim))[::-1])

  def squeeze(self, axis=None):
    if axis is None:
      axis = tuple(i for i, d in enumerate(self.shape) if d == 1)
    elif isinstance(axis, int):
      axis = (axis,)
    axis = tuple(a + self.ndim if a < 0 else a for a in axis)
    for a in axis:
      if not 0 <= a < self.ndim or self.shape[a] != 1:
        raise ValueError(f"Cannot squeeze axis {a} of layout with shape {self.shape}")
    keep = [i for i in range(self.ndim) if i not in axis]
    return Layout(tuple(self.shape[i] for i in keep), tuple(self.strides[i] for i in keep), self.offset)

  # ##### Slice Ops #####
  def __getitem__(self, key):
    key = (key,) if isinstance(key, (slice, numbers.Integral)) else tuple(key)
    if not all(isinstance(k, (slice, numbers.Integral)) for k in key):
      raise TypeError(f"Only integers and slices are valid layout indices, got {key}")
    if len(key) > self.ndim:
      raise IndexError(f"Too many indices for {self.ndim}-dimensional layout: {key}")
    offset, reduce_dim = self.offset, []
    shape, strides = list(self.shape), list(self.strides)
    for i, k in enumerate(key):
      if isinstance(k, numbers.Integral):  # indexing
        k = operator.index(k)
        idx = k + shape[i] if k < 0 else k
        if not 0 <= idx < shape[i]:
          raise IndexError(f"index {k} is out of bounds for axis {i} with size {shape[i]}")
        offset += strides[i] * idx
        reduce_dim.append(i)
      else:  # slicing/striding
        start, _, step, size = calculate_slices(k.start, k.stop, k.step, shape[i])
        shape[i] = size
        if size:
          offset += strides[i] * start
        strides[i] *= step
    shape = tuple(s for i, s in enumerate(shape) if i not in reduce_dim)
    strides = tuple(s for i, s in enumerate(strides) if i not in reduce_dim)
    return Layout(shape, strides, offset)
