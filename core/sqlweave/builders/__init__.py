"""
Fluent, immutable statement builders (SELECT, INSERT, UPDATE, DELETE, CASE).
"""
