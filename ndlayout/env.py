import os

DEBUG = int(os.getenv("DEBUG", "0"))
BOUNDS_CHECK = int(os.getenv("BOUNDS_CHECK", "1"))
# NOTE: bookkeeping width for reference-like kinds (str/object), not a physical size
OBJECT_ITEMSIZE = int(os.getenv("OBJECT_ITEMSIZE", "16"))

assert OBJECT_ITEMSIZE > 0, f"OBJECT_ITEMSIZE must be positive, got {OBJECT_ITEMSIZE}"
