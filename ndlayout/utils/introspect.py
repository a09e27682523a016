import numbers

import numpy as np

from ndlayout.dtype import ElementKind, as_kind
from ndlayout.errors import InhomogeneousShapeError, UnsupportedKindError


def _is_array(value):
  if isinstance(value, np.ndarray):
    return value.ndim > 0
  return isinstance(value, (list, tuple))

def _leaf_kind(value):
  if isinstance(value, (np.generic, np.ndarray)):
    return as_kind(value.dtype)
  if isinstance(value, bool):
    raise UnsupportedKindError(bool)
  for tp in (float, int, str):
    if isinstance(value, tp):
      return as_kind(tp)
  if isinstance(value, complex):
    return as_kind(complex)
  return ElementKind.OBJECT

def resolve_scalar_kind(value):
  """Return the innermost element kind of a (possibly nested) array value.

  Lists and tuples are descended through their first element at every level. An empty
  level resolves to FLOAT64, the kind numpy picks for `np.array([])`.
  """
  while _is_array(value):
    if isinstance(value, np.ndarray):
      if value.dtype != object:
        return as_kind(value.dtype)
      if value.size == 0:
        return ElementKind.OBJECT
      value = value.flat[0]
      continue
    if len(value) == 0:
      return ElementKind.FLOAT64
    value = value[0]
  return _leaf_kind(value)

def is_primitive_array(value):
  if not _is_array(value):
    return False
  if isinstance(value, np.ndarray):
    if value.dtype != object:
      return True
    value = value.ravel()
  if len(value) == 0:
    return True
  first = value[0]
  if _is_array(first):
    return is_primitive_array(first)
  return is_scalar_value(first)

def is_scalar_value(value):
  return isinstance(value, (numbers.Number, str))

def is_floating_scalar(value):
  return isinstance(value, (float, np.float32, np.float64))

def infer_shape(value):
  if isinstance(value, np.ndarray):
    return tuple(value.shape)
  shape, level = [], [value]
  while level and all(_is_array(v) for v in level):
    lengths = {len(v) for v in level}
    if len(lengths) > 1:
      raise InhomogeneousShapeError(len(shape), shape)
    shape.append(lengths.pop())
    level = [e for v in level for e in v]
  if any(_is_array(v) for v in level):
    raise InhomogeneousShapeError(len(shape), shape)
  return tuple(shape)
