"""Domain layer for Sprint Tracker.

Pure data models and functions: no I/O, no subprocesses.

Subpackages:
    shared - Result monad used for expected failures
    sprint - Sprint document models and board calculations
"""
