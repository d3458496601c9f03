"""
Rendering package for SQL fragments.

Fragments render to (sql, args); composites render their children raw and
splice them in, and the outermost statement rewrites the universal `?`
marker into the target placeholder style.
"""
