class LayoutError(Exception):
  pass

class ShapeError(LayoutError, ValueError):
  pass

class ShapeIncompatibilityError(ShapeError):
  def __init__(self, shape1, shape2):
    self.shapes = (tuple(shape1), tuple(shape2))
    super().__init__(*self.shapes)

  def __str__(self):
    return f"Shapes cannot be broadcast together: {self.shapes[0]} and {self.shapes[1]}"

class InvalidSizeError(ShapeError):
  def __init__(self, shape):
    self.shape = tuple(shape)
    super().__init__(self.shape)

  def __str__(self):
    return f"Invalid dimension size in shape: {self.shape}"

class ShapeMismatchError(ShapeError):
  def __init__(self, size, shape):
    self.size, self.shape = size, tuple(shape)
    super().__init__(size, self.shape)

  def __str__(self):
    return f"Cannot reshape array of size {self.size} into shape {self.shape}"

class InhomogeneousShapeError(ShapeError):
  def __init__(self, ndim, shape):
    # ndim/shape describe the consistent part found before the ragged level
    self.ndim, self.shape = ndim, tuple(shape)
    super().__init__(ndim, self.shape)

  def __str__(self):
    return (f"The requested array has an inhomogeneous shape after {self.ndim} dimensions. "
            f"The detected shape was {self.shape} + inhomogeneous part.")

class UnsupportedKindError(LayoutError, TypeError):
  def __init__(self, kind):
    self.kind = kind
    super().__init__(kind)

  def __str__(self):
    return f"Unsupported element kind: {self.kind!r}"

class DimensionMismatchError(LayoutError, ValueError):
  def __init__(self, coords, strides):
    self.coords, self.strides = tuple(coords), tuple(strides)
    super().__init__(self.coords, self.strides)

  def __str__(self):
    return (f"Dimension mismatch: got {len(self.coords)} values {self.coords} "
            f"for {len(self.strides)} strides {self.strides}")
