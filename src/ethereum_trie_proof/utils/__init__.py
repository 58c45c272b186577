"""
Utility functions used by the proof verifier.
"""
