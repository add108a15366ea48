from resume_review.raster.loader import EngineLoader, get_engine_loader
from resume_review.raster.models import ConversionResult, DocumentFile, ImageHandle
from resume_review.raster.rasterizer import Rasterizer, build_rasterizer

__all__ = [
    "ConversionResult",
    "DocumentFile",
    "EngineLoader",
    "ImageHandle",
    "Rasterizer",
    "build_rasterizer",
    "get_engine_loader",
]
