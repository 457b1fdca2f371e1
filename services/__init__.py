"""
services/ - Business Logic Layer
================================
Work that is neither SQL nor HTTP: storing uploaded files on disk.
"""
