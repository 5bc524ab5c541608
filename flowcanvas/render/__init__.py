from .surface import SurfaceRenderer


__all__ = ["SurfaceRenderer"]
