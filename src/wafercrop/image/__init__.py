"""
Image stage functions: conversion, I/O, cropping, resizing and composition.
"""

from .compose import combine_vertical
from .converters import decode_image, encode_image, ensure_bgr, to_grayscale
from .crop import crop_circle, crop_rect
from .io import load_image, save_image
from .resize import fit_dimensions, resize_keep_aspect

__all__ = [
    "combine_vertical",
    "crop_circle",
    "crop_rect",
    "decode_image",
    "encode_image",
    "ensure_bgr",
    "fit_dimensions",
    "load_image",
    "resize_keep_aspect",
    "save_image",
    "to_grayscale",
]
