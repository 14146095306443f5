"""
Configuration and post scoring
"""
