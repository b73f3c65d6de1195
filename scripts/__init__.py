"""Helper package for command-line entry points.

This module makes the `scripts` folder importable so test suites and the
installed `cows-maze` console script can resolve `scripts.cows_cli`
without relying on path hacks.
"""
