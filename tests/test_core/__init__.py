"""
Core algorithm tests for Linear Covariance.

Tests for:
- Symmetric matrix codec
- Linear form extraction
- MLE system construction
- Start pair synthesis
"""
