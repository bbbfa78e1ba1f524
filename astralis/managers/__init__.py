"""
Configuration management.
"""
