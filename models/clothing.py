"""Wardrobe analysis value types produced from vision model output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ClothingItem:
    """One garment identified in the wardrobe photo."""

    type: str
    color: str
    style: str
    material: Optional[str] = None
    condition: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"type": self.type, "color": self.color, "style": self.style}
        if self.material is not None:
            payload["material"] = self.material
        if self.condition is not None:
            payload["condition"] = self.condition
        return payload

    def describe(self) -> str:
        """Render the item as ``type - color, style[, material][ (condition)]``."""

        text = f"{self.type} - {self.color}, {self.style}"
        if self.material:
            text += f", {self.material}"
        if self.condition:
            text += f" ({self.condition})"
        return text


@dataclass(frozen=True)
class ClothingAnalysis:
    """Structured view of everything visible in the wardrobe photo."""

    items: Tuple[ClothingItem, ...] = field(default_factory=tuple)
    overall_style: str = ""
    color_palette: Tuple[str, ...] = field(default_factory=tuple)
    summary: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {
            "items": [item.to_payload() for item in self.items],
            "overallStyle": self.overall_style,
            "colorPalette": list(self.color_palette),
            "summary": self.summary,
        }


__all__ = ["ClothingItem", "ClothingAnalysis"]
