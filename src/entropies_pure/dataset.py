"""
Dataset: an ordered sequence of state vectors of equal length.
"""

import numpy as np


class Dataset:
    """
    Ordered sequence of ``n_points`` state vectors of dimension ``dimension``.

    The data is stored as a read-only float array of shape (n_points, dimension),
    one row per state vector.

    Parameters
    ----------
    data : array_like or Dataset
        2-D array (rows are points), a sequence of equal-length vectors, or a
        1-D array (interpreted as n_points vectors of dimension 1).
    """

    __slots__ = ('_data',)

    def __init__(self, data):
        if isinstance(data, Dataset):
            arr = data._data
        else:
            arr = np.array(data, dtype=np.float64)
            if arr.ndim == 1:
                arr = arr.reshape(-1, 1)
            elif arr.ndim != 2:
                raise ValueError(f"a Dataset needs 1-d or 2-d data, got {arr.ndim} dimensions")
            arr.flags.writeable = False
        object.__setattr__(self, '_data', arr)

    def __setattr__(self, name, value):
        raise AttributeError("Dataset is immutable")

    @property
    def data(self) -> np.ndarray:
        """Read-only (n_points, dimension) array."""
        return self._data

    @property
    def dimension(self) -> int:
        return self._data.shape[1]

    def __len__(self):
        return self._data.shape[0]

    def __iter__(self):
        return iter(self._data)

    def __getitem__(self, item):
        return self._data[item]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data.copy() if copy else self._data
        return self._data.astype(dtype)

    def minima(self) -> np.ndarray:
        return self._data.min(axis=0)

    def maxima(self) -> np.ndarray:
        return self._data.max(axis=0)

    def __repr__(self):
        return f"{self.dimension}-dimensional Dataset with {len(self)} points"
