"""
Crop Service - orchestration of the wafer/panel extraction pipeline.

Each enabled branch loads the source, converts it to grayscale, runs its
detector, crops the first candidate and normalizes its size. Branch outcomes
are explicit BranchResult values; a fault in one branch is logged and never
stops the other. If both branches succeed the wafer crop is stacked above the
panel crop.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

import numpy as np

from wafercrop.common.constants import ImageConstants
from wafercrop.config import PipelineConfig
from wafercrop.domain_types import BranchStatus, CropKind
from wafercrop.image import (
    combine_vertical,
    crop_circle,
    crop_rect,
    load_image,
    resize_keep_aspect,
    save_image,
    to_grayscale,
)
from wafercrop.image.io import ImageSource, describe_source
from wafercrop.utils import timer
from wafercrop.vision import CircleDetector, RectangleDetector

logger = logging.getLogger(__name__)

UNREADABLE_SOURCE = "unreadable source"
NO_FEATURE = "no feature detected"


@dataclass
class BranchResult:
    """Outcome of one pipeline branch."""

    kind: CropKind
    status: BranchStatus
    image: Optional[np.ndarray] = None
    reason: Optional[str] = None
    processing_time_ms: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == BranchStatus.SUCCESS

    @classmethod
    def success(cls, kind: CropKind, image: np.ndarray) -> "BranchResult":
        return cls(kind=kind, status=BranchStatus.SUCCESS, image=image)

    @classmethod
    def absent(cls, kind: CropKind, reason: str) -> "BranchResult":
        return cls(kind=kind, status=BranchStatus.ABSENT, reason=reason)

    @classmethod
    def fault(cls, kind: CropKind, error: Exception) -> "BranchResult":
        return cls(kind=kind, status=BranchStatus.FAULT, reason=f"{type(error).__name__}: {error}")


@dataclass
class PipelineResult:
    """Final image (single crop, composite or None) plus per-branch outcomes."""

    image: Optional[np.ndarray] = None
    branches: List[BranchResult] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.image is not None

    def branch(self, kind: CropKind) -> Optional[BranchResult]:
        for result in self.branches:
            if result.kind == kind:
                return result
        return None


class CropService:
    """
    Pipeline orchestrator for wafer and panel crops.

    Holds only detectors and sizing set at construction, so one instance can
    serve concurrent invocations on different sources.
    """

    def __init__(
        self,
        circle_detector: Optional[CircleDetector] = None,
        rect_detector: Optional[RectangleDetector] = None,
        circle_target_size: int = ImageConstants.CIRCLE_TARGET_SIZE,
        rect_target_width: int = ImageConstants.RECT_TARGET_WIDTH,
        default_config: Optional[PipelineConfig] = None,
    ):
        """
        Initialize crop service.

        Args:
            circle_detector: Wafer detector (default tuning if omitted)
            rect_detector: Panel detector (default tuning if omitted)
            circle_target_size: Square footprint for circular crops
            rect_target_width: Target width for rectangular crops
            default_config: Branch selection used when a call passes none
        """
        self.circle_detector = circle_detector or CircleDetector()
        self.rect_detector = rect_detector or RectangleDetector()
        self.circle_target_size = circle_target_size
        self.rect_target_width = rect_target_width
        self.default_config = default_config or PipelineConfig()

    @classmethod
    def from_settings(cls, settings=None) -> "CropService":
        """Build a service from application settings."""
        if settings is None:
            from wafercrop.config import get_settings

            settings = get_settings()

        return cls(
            circle_detector=CircleDetector(settings.vision.circle_params()),
            rect_detector=RectangleDetector(settings.vision.panel_params()),
            circle_target_size=settings.pipeline.circle_target_size,
            rect_target_width=settings.pipeline.rect_target_width,
            default_config=settings.pipeline_config(),
        )

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def crop_circle(self, source: ImageSource) -> BranchResult:
        """Extract the wafer disk, fitted to the square footprint."""
        return self._run_branch(CropKind.CIRCLE, source, self._circle_branch)

    def crop_rect(self, source: ImageSource) -> BranchResult:
        """Extract the histogram panel, fitted to the target width."""
        return self._run_branch(CropKind.RECT, source, self._rect_branch)

    def _circle_branch(self, image: np.ndarray) -> Optional[np.ndarray]:
        gray = to_grayscale(image)
        circles = self.circle_detector.detect(gray)
        if not circles:
            return None

        # First detected circle wins; remaining candidates are discarded
        circle = circles[0]
        logger.debug(
            f"Using circle at ({circle.center.x:.1f}, {circle.center.y:.1f}) "
            f"r={circle.radius:.1f} of {len(circles)} candidate(s)"
        )
        cropped = crop_circle(image, circle)
        return resize_keep_aspect(cropped, self.circle_target_size, self.circle_target_size)

    def _rect_branch(self, image: np.ndarray) -> Optional[np.ndarray]:
        gray = to_grayscale(image)
        rects = self.rect_detector.detect(gray)
        if not rects:
            return None

        # First qualifying contour wins
        rect = rects[0]
        logger.debug(f"Using panel {rect.to_dict()} of {len(rects)} candidate(s)")
        cropped = crop_rect(image, rect)

        # Height derived from the target width so the panel keeps its aspect
        crop_height, crop_width = cropped.shape[:2]
        target_height = max(1, int(round(crop_height * self.rect_target_width / crop_width)))
        return resize_keep_aspect(cropped, self.rect_target_width, target_height)

    def _run_branch(
        self,
        kind: CropKind,
        source: ImageSource,
        branch: Callable[[np.ndarray], Optional[np.ndarray]],
    ) -> BranchResult:
        if source is None:
            raise ValueError("Image source must not be None")

        label = describe_source(source)
        with timer() as t:
            try:
                image = load_image(source)
                if image is None:
                    logger.warning(f"Failed to read image: {label}")
                    result = BranchResult.absent(kind, UNREADABLE_SOURCE)
                else:
                    output = branch(image)
                    if output is None:
                        logger.info(f"No {kind.value} region found in {label}")
                        result = BranchResult.absent(kind, NO_FEATURE)
                    else:
                        result = BranchResult.success(kind, output)
            except Exception as e:
                logger.error(
                    f"Error while processing {kind.value} crop of {label}: {e}", exc_info=True
                )
                result = BranchResult.fault(kind, e)

        result.processing_time_ms = t["ms"]
        logger.debug(f"{kind.value} branch finished: {result.status.value} in {t['ms']}ms")
        return result

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def run(self, source: ImageSource, config: Optional[PipelineConfig] = None) -> PipelineResult:
        """
        Run the enabled branches and combine their results.

        Args:
            source: Image path or encoded image bytes
            config: Branch selection (service default if omitted)

        Returns:
            PipelineResult; image is None when no enabled branch produced a crop
        """
        config = config or self.default_config
        branches = []

        if config.include_circle:
            branches.append(self.crop_circle(source))
        if config.include_rect:
            branches.append(self.crop_rect(source))

        images = [b.image for b in branches if b.succeeded]

        if len(images) == 2:
            final = combine_vertical(images[0], images[1])
        elif len(images) == 1:
            final = images[0]
        else:
            final = None

        return PipelineResult(image=final, branches=branches)

    def crop_image(
        self, source: ImageSource, config: Optional[PipelineConfig] = None
    ) -> Optional[np.ndarray]:
        """Return the cropped (and possibly combined) image, or None."""
        return self.run(source, config).image

    def crop_to_file(
        self,
        source: ImageSource,
        destination: Union[str, Path],
        config: Optional[PipelineConfig] = None,
    ) -> bool:
        """
        Crop source and write the result to destination.

        Returns:
            True if a result was produced and written
        """
        image = self.crop_image(source, config)
        if image is None:
            logger.warning(f"Crop failed, nothing written for {describe_source(source)}")
            return False

        return save_image(image, destination)
