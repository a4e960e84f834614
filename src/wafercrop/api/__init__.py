"""
HTTP surface for the crop pipeline.
"""
