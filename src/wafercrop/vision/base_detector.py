"""
Base detector class for vision algorithms.

Provides the common interface the pipeline relies on: a detector takes an
image and returns an ordered list of candidates, best first.
"""

import logging
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Type, TypeVar, Union

import numpy as np

from wafercrop.image.converters import to_grayscale

from .params import BaseDetectionParams

P = TypeVar("P", bound=BaseDetectionParams)


class BaseDetector(ABC, Generic[P]):
    """
    Abstract base class for vision detectors.

    Subclasses set params_class and implement detect(). Parameters may be
    given as a params model or a plain dict, which is validated into the model.
    """

    params_class: Type[P]

    def __init__(self, params: Optional[Union[P, dict]] = None):
        """Initialize base detector with logger and validated parameters."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self.params = self._coerce_params(params)

    def _coerce_params(self, params: Optional[Union[P, dict]]) -> P:
        if params is None:
            return self.params_class()
        if isinstance(params, dict):
            return self.params_class(**params)
        return params

    @abstractmethod
    def detect(self, image: np.ndarray) -> List:
        """
        Perform detection on image.

        Args:
            image: Input image (grayscale; BGR is converted)

        Returns:
            Candidates in the detector's native order, best first; empty if none
        """

    def _ensure_grayscale(self, image: np.ndarray) -> np.ndarray:
        """Convert image to grayscale if needed."""
        if image is not None and image.ndim == 2:
            return image
        return to_grayscale(image)
