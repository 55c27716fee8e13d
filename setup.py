#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="pyquest",                                  # your PyPI/distribution name
    version="0.1.0",
    description="Approximate covariance matrices for vectors of sample-quantile estimators",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    # this will find your pyquest/ package (and any subpackages),
    # but exclude tests, docs, notebooks, etc.
    packages=find_packages(exclude=["tests*", "docs*", "notebooks*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "scipy>=1.10",
        "pandas>=1.5",
        "statsmodels>=0.13",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    include_package_data=False,   # True, if you have a MANIFEST.in or package_data
)
