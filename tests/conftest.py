# Import the real pandas/numpy before any test snapshots sys.modules with
# patch.dict; otherwise they are evicted on exit and numpy's C extension
# cannot be re-imported in the same process.
import pandas  # noqa: F401
