"""
Configuration and information functions for the entropies module.
"""

import logging
import os
from typing import List

import numpy as np

logger = logging.getLogger("entropies_pure")
logger.addHandler(logging.NullHandler())

# Default parameters
_defaults = {
    'k': 1,                  # neighbors for Kraskov
    'w': 0,                  # Theiler window
    'base': np.e,            # logarithm base of nearest-neighbor estimates
    'tolerance': 1e-8,       # L1 tolerance of the invariant measure
    'max_iterations': 200,   # hard cap of the invariant measure iteration
    'wavelet': 'db12',       # MODWT filter
}

# Last computation info
_last_info = {
    'n_points': 0,
    'n_errors': 0,
    'n_eff': 0,
    'n_iterations': 0,
    'converged': True,
    'residual': 0.0,
}

# Multithreading settings
_n_threads = -1  # -1 for auto
_use_threads = True

_verbosity_levels = {0: logging.WARNING, 1: logging.INFO}


def _reset_last_info() -> None:
    _last_info.update(n_points=0, n_errors=0, n_eff=0, n_iterations=0,
                      converged=True, residual=0.0)


def get_last_info(verbosity: int = 0) -> List:
    """
    Returns information from the last nearest-neighbor or invariant measure computation.

    Parameters
    ----------
    verbosity : int
        If > 0, print information to console

    Returns
    -------
    List
        [n_points, n_errors, n_eff, n_iterations, converged, residual]
    """
    if verbosity > 0:
        print("from last function call:")
        print(f"- nb of points:               {_last_info['n_points']}")
        print(f"- nb of errors encountered:   {_last_info['n_errors']} (points discarded)")
        print(f"- effective nb of points:     {_last_info['n_eff']}")
        print(f"- nb of iterations:           {_last_info['n_iterations']}")
        print(f"- converged:                  {_last_info['converged']} (residual {_last_info['residual']:.3g})")

    return [
        _last_info['n_points'],
        _last_info['n_errors'],
        _last_info['n_eff'],
        _last_info['n_iterations'],
        _last_info['converged'],
        _last_info['residual'],
    ]


def set_defaults(**kwargs) -> None:
    """
    Set package-wide default parameters.

    Parameters
    ----------
    k : int
        Number of neighbors for the Kraskov estimator (>= 1)
    w : int
        Theiler window of the nearest-neighbor estimators (>= 0)
    base : float
        Logarithm base of the nearest-neighbor estimators (> 0, != 1)
    tolerance : float
        L1 tolerance of the invariant measure iteration (> 0)
    max_iterations : int
        Maximum number of invariant measure iterations (>= 1)
    wavelet : str
        Default wavelet filter of TimeScaleMODWT
    """
    for key, value in kwargs.items():
        if key not in _defaults:
            raise ValueError(f"unknown default parameter '{key}'")
        if key == 'k' and value < 1:
            raise ValueError(f"k must be >= 1, got {value}")
        if key == 'w' and value < 0:
            raise ValueError(f"w must be >= 0, got {value}")
        if key == 'base' and (value <= 0 or value == 1):
            raise ValueError(f"base must be positive and != 1, got {value}")
        if key == 'tolerance' and value <= 0:
            raise ValueError(f"tolerance must be positive, got {value}")
        if key == 'max_iterations' and value < 1:
            raise ValueError(f"max_iterations must be >= 1, got {value}")
    _defaults.update(kwargs)
    logger.debug("defaults updated: %s", kwargs)


def get_defaults(verbosity: int = 0) -> dict:
    """
    Get the default parameters.

    Parameters
    ----------
    verbosity : int
        If > 0, print to console

    Returns
    -------
    dict
        copy of the current defaults
    """
    if verbosity > 0:
        for key, value in _defaults.items():
            print(f"{key:<15}: {value}")
    return dict(_defaults)


def get_default(key: str):
    """Get a single default parameter."""
    return _defaults[key]


def set_verbosity(level: int = 1) -> None:
    """
    Set the verbosity level of the library.

    Parameters
    ----------
    level : int
        Verbosity level (0=warnings only, 1=info, 2+=debug)
    """
    logger.setLevel(_verbosity_levels.get(level, logging.DEBUG))


def get_verbosity() -> int:
    """Get the current verbosity level."""
    level = logger.getEffectiveLevel()
    if level <= logging.DEBUG:
        verbosity = 2
    elif level <= logging.INFO:
        verbosity = 1
    else:
        verbosity = 0
    print(f"verbosity level: {verbosity}")
    return verbosity


def multithreading(do_what="info", nb_cores: int = 0) -> None:
    """
    Configure multithreading of the nearest-neighbor searches.

    Parameters
    ----------
    do_what : str or int
        "info": display current settings
        "auto": use all available cores
        "single": single-threaded
        int > 0: use this many cores
    nb_cores : int
        If > 0, use this many cores
    """
    global _n_threads, _use_threads

    if nb_cores > 0:
        do_what = nb_cores

    if do_what == "info":
        avail = os.cpu_count() or 1
        current = _n_threads if _n_threads > 0 else avail
        print(f"currently using {current} out of {avail} cores available")
        if _n_threads == -1:
            print(f" (-1 means largest number available, so {avail} here)")
    elif do_what == "auto":
        _use_threads = True
        _n_threads = -1
    elif do_what == "single":
        _use_threads = False
        _n_threads = 1
    elif isinstance(do_what, int) and do_what > 0:
        _use_threads = True
        _n_threads = do_what
    else:
        raise ValueError("invalid parameter value")


def get_threads_number() -> int:
    """Get the current number of threads (-1 means all cores, as scipy's `workers`)."""
    if _use_threads:
        return _n_threads
    return 1
