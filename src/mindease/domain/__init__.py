"""
MindEase Domain Layer

Pure data types for conversations. No I/O, no framework imports.
"""
