"""
Configuration tests for Linear Covariance.

Covers settings, presets, random state management and environment checks.
"""
