from enum import Enum
from types import MappingProxyType

import numpy as np

from ndlayout.env import DEBUG, OBJECT_ITEMSIZE
from ndlayout.errors import UnsupportedKindError


class ElementKind(Enum):
  BYTE = "int8"
  SHORT = "int16"
  INT32 = "int32"
  INT64 = "int64"
  FLOAT32 = "float32"
  FLOAT64 = "float64"
  STR = "str"
  OBJECT = "object"

  @property
  def np_dtype(self):
    return np.dtype(self.value)

  def __repr__(self):
    return f"<ElementKind.{self.name}>"

ELEMENT_SIZES = MappingProxyType({
  ElementKind.BYTE: 1, ElementKind.SHORT: 2,
  ElementKind.INT32: 4, ElementKind.FLOAT32: 4,
  ElementKind.INT64: 8, ElementKind.FLOAT64: 8,
  ElementKind.STR: OBJECT_ITEMSIZE, ElementKind.OBJECT: OBJECT_ITEMSIZE,
})
if DEBUG >= 2:
  print(f"[DEBUG] element sizes: {dict((k.name, v) for k, v in ELEMENT_SIZES.items())}")

# python builtins are mapped explicitly, np.dtype(int) is platform dependent
_PY_KINDS = {int: ElementKind.INT64, float: ElementKind.FLOAT64, str: ElementKind.STR, object: ElementKind.OBJECT}
_NP_KINDS = {k.value: k for k in ElementKind if k not in (ElementKind.STR, ElementKind.OBJECT)}

def as_kind(obj):
  if isinstance(obj, ElementKind):
    return obj
  if isinstance(obj, type) and obj in _PY_KINDS:
    return _PY_KINDS[obj]
  # other classes would collapse to dtype("O"), only `object` itself is registered
  if obj is None or (isinstance(obj, type) and not issubclass(obj, np.generic)):
    raise UnsupportedKindError(obj)
  try:
    dtype = np.dtype(obj)
  except (TypeError, ValueError):
    raise UnsupportedKindError(obj) from None
  if dtype.kind in "US":
    return ElementKind.STR
  if dtype.kind == "O":
    return ElementKind.OBJECT
  if dtype.name not in _NP_KINDS:
    raise UnsupportedKindError(obj)
  return _NP_KINDS[dtype.name]

def element_size(kind):
  kind = as_kind(kind)
  if kind not in ELEMENT_SIZES:
    raise UnsupportedKindError(kind)
  return ELEMENT_SIZES[kind]
