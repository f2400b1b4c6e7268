"""
setup.py for package "entropies_pure"
Pure Python implementation - no compilation required.
"""
from setuptools import setup, find_packages

setup(
    name='entropies_pure',
    version='2.0.0',
    description="Probabilities estimators and generalized entropies of timeseries and datasets (pure Python)",
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.20',
        'scipy>=1.7',
        'PyWavelets>=1.1',
    ],
    extras_require={
        'dev': ['pytest'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Scientific/Engineering :: Information Analysis',
    ],
)
