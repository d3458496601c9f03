"""
Configuration for sqlweave: YAML profiles and environment helpers.

Profiles select the default placeholder style and whether statements
reject marker/argument count mismatches.
"""
