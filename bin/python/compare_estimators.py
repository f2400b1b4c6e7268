import numpy
import entropies_pure as entropies

from time import time
from numpy.random import normal


# parameters (change them to play)
npoints = 20000
m       = 4         # motif length of the permutation estimators
tau     = 1         # embedding lag
n_bins  = 8         # bins per axis for the histograms and the transfer operator


def logistic(npoints, r=4., x0=0.4):
    x = numpy.zeros(npoints)
    x[0] = x0
    for i in range(1, npoints):
        x[i] = r*x[i-1]*(1-x[i-1])
    return x


def compare_estimators(x):
    D = entropies.embed(x, (0, -1))     # 2-d reconstruction, for the binning estimators
    binning = entropies.RectangularBinning(n_bins)

    estimators = [
        ("counts (bins)     ", entropies.VisitationFrequency(binning), D),
        ("transfer operator ", entropies.TransferOperator(binning), D),
        ("permutation       ", entropies.SymbolicPermutation(m, tau, lt=entropies.isless), x),
        ("weighted perm.    ", entropies.SymbolicWeightedPermutation(m, tau, lt=entropies.isless), x),
        ("amplitude-aware   ", entropies.SymbolicAmplitudeAwarePermutation(m, tau, lt=entropies.isless), x),
        ("power spectrum    ", entropies.PowerSpectrum(), x),
        ("wavelet (MODWT)   ", entropies.TimeScaleMODWT('db4'), x),
    ]
    for name, est, data in estimators:
        t1=time()
        H   = entropies.genentropy(data, est, base=2)
        H_n = entropies.entropy_normalized(entropies.Shannon(), data, est)
        t1=time()-t1
        print(name, "H =", round(H, 4), "bits, normalized =", round(H_n, 4), "\t(elapsed time :", round(t1, 3), "s)")

    t1=time()
    H = entropies.genentropy(x, entropies.Kraskov(k=5, w=1))
    t1=time()-t1
    print("Kraskov k-NN       H =", round(H, 4), "nats (differential)", "\t(elapsed time :", round(t1, 3), "s)")
    print("SampEn(2, 0.2)     =", round(entropies.sample_entropy(x[:5000]), 4))


# first, white noise: all patterns and frequencies are equally likely
print()
print("normal distribution, uncorrelated,", npoints, "points.")
compare_estimators(normal(size=npoints))

# then, chaotic logistic map: forbidden ordinal patterns lower the permutation entropy
print()
print("logistic map (r=4),", npoints, "points.")
compare_estimators(logistic(npoints))
