"""
Command line display client.
"""
