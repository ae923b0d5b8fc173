"""
Integration Tests Package

Full render passes against in-memory surfaces.

TEST AXIOMS:
=============
1. The surface never receives a window that breaks its contract
2. A surface failure ends in a fallback render, never an exception
3. The probe reads, never writes
"""
