from ndlayout.dtype import ELEMENT_SIZES, ElementKind, as_kind, element_size
from ndlayout.errors import (DimensionMismatchError, InhomogeneousShapeError, InvalidSizeError, LayoutError,
                             ShapeError, ShapeIncompatibilityError, ShapeMismatchError, UnsupportedKindError)
from ndlayout.layout import Layout
from ndlayout.utils.array import (broadcast_all, broadcast_index, broadcast_shapes, broadcast_strides,
                                  calculate_contiguity, calculate_slices, normalize_shape, resolve_reshape)
from ndlayout.utils.index import (byte_strides, col_major_strides, nbytes, row_major_strides, to_coordinates,
                                  to_flat_index)
from ndlayout.utils.introspect import (infer_shape, is_floating_scalar, is_primitive_array, is_scalar_value,
                                       resolve_scalar_kind)
