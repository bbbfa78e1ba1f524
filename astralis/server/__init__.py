"""
REST boundary for the Astralis API.
"""
