"""
Static reference data.
"""
