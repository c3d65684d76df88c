"""
core/render - 리소스 렌더러 규약
"""

from .base import BaseRenderer, Column, Renderer, SummaryField, truncate

__all__: list[str] = ["Column", "SummaryField", "Renderer", "BaseRenderer", "truncate"]
