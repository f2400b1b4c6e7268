# entropies_pure - Probabilities and entropy estimators for timeseries and datasets
# Based on ordinal patterns, binnings, transfer operators, spectra and k-NN distances
#
# This module provides pure Python implementations (numpy, scipy, PyWavelets)
# without requiring compilation of C/C++ code.

from .commons import (
    get_last_info,
    set_defaults,
    get_defaults,
    set_verbosity,
    get_verbosity,
    multithreading,
)

from .errors import (
    EntropiesError,
    UnboundedAlphabetError,
    IncompatibleInputError,
)

from .dataset import Dataset

from .tools import (
    embed,
    genembed,
)

from .probabilities import Probabilities

from .estimators import (
    ProbabilitiesEstimator,
    probabilities,
    probabilities_and_events,
    alphabet_length,
)

from .symbolize import (
    isless,
    isless_rand,
    encode_motif,
    ordinal_pattern,
    OrdinalPattern,
    symbolize,
)

from .binning import (
    RectangularBinning,
    minima_edgelengths,
    bin_edges,
    encode_points,
    bin_dataset,
    joint_visits,
    marginal_visits,
)

# Estimators
from .counting import CountOccurrences
from .permutation import (
    SymbolicPermutation,
    SymbolicWeightedPermutation,
    SymbolicAmplitudeAwarePermutation,
)
from .spatial import SpatialSymbolicPermutation
from .histogram import VisitationFrequency, binhist
from .transferoperator import (
    TransferOperator,
    TransferOperatorApproximation,
    InvariantMeasureEstimate,
    transferoperator,
    transfermatrix,
    invariantmeasure,
)
from .nearest_neighbors import (
    Kraskov,
    KozachenkoLeonenko,
    KDTreeSearch,
    BruteForceSearch,
)
from .timescales import (
    PowerSpectrum,
    TimeScaleMODWT,
    get_modwt,
    energy_at_scale,
    energy_at_time,
    relative_wavelet_energy,
    time_scale_density,
    maxmodwttransformlevels,
)

# Entropies
from .entropy import (
    genentropy,
    Renyi,
    Shannon,
    Tsallis,
    Curado,
    entropy,
    entropy_maximum,
    entropy_normalized,
)

from .complexity import (
    approx_entropy,
    sample_entropy,
)

__version__ = "2.0.0"
__all__ = [
    # Commons
    "get_last_info",
    "set_defaults",
    "get_defaults",
    "set_verbosity",
    "get_verbosity",
    "multithreading",
    # Errors
    "EntropiesError",
    "UnboundedAlphabetError",
    "IncompatibleInputError",
    # Data
    "Dataset",
    "embed",
    "genembed",
    "Probabilities",
    # Estimator interface
    "ProbabilitiesEstimator",
    "probabilities",
    "probabilities_and_events",
    "alphabet_length",
    # Symbolization
    "isless",
    "isless_rand",
    "encode_motif",
    "ordinal_pattern",
    "OrdinalPattern",
    "symbolize",
    # Binning
    "RectangularBinning",
    "minima_edgelengths",
    "bin_edges",
    "encode_points",
    "bin_dataset",
    "joint_visits",
    "marginal_visits",
    # Estimators
    "CountOccurrences",
    "SymbolicPermutation",
    "SymbolicWeightedPermutation",
    "SymbolicAmplitudeAwarePermutation",
    "SpatialSymbolicPermutation",
    "VisitationFrequency",
    "binhist",
    "TransferOperator",
    "TransferOperatorApproximation",
    "InvariantMeasureEstimate",
    "transferoperator",
    "transfermatrix",
    "invariantmeasure",
    "Kraskov",
    "KozachenkoLeonenko",
    "KDTreeSearch",
    "BruteForceSearch",
    "PowerSpectrum",
    "TimeScaleMODWT",
    "get_modwt",
    "energy_at_scale",
    "energy_at_time",
    "relative_wavelet_energy",
    "time_scale_density",
    "maxmodwttransformlevels",
    # Entropies
    "genentropy",
    "Renyi",
    "Shannon",
    "Tsallis",
    "Curado",
    "entropy",
    "entropy_maximum",
    "entropy_normalized",
    # Complexities
    "approx_entropy",
    "sample_entropy",
]
