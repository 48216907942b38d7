"""Dimension scaffold -- creates a contract and tests workspace for the Dimension Platform.

The generated workspace contains a ``contract`` package, a ``tests`` package
whose manifests share one centrally tracked set of Dimension dependencies, and
the toolchain, Makefile and CI files needed to build and test them.
"""

__version__ = "0.3.0"
