"""
Sprite viewer: load multi-frame sprites from descriptors, animate them,
and export frame sets to packed sprite sheets.
"""
