"""
Enumeration Types
------------------

Enum classes for the blog database models.

Enums:
    - TagKind: What a tag label classifies (plain tag, category, series)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class TagKind(str, Enum):
    """
    Enumeration of tag kinds.

    - TAG: Free-form keyword, shown as ``#label``
    - CATEGORY: Broad subject area, shown as ``@label``
    - SERIES: Ordered multi-part series, shown as ``+label``
    """

    TAG = "tag"
    CATEGORY = "category"
    SERIES = "series"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available tag kind choices."""
        return [kind.value for kind in cls]

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        display_map = {
            TagKind.TAG: "Tag",
            TagKind.CATEGORY: "Category",
            TagKind.SERIES: "Series",
        }
        return display_map[self]

    @property
    def plural_name(self) -> str:
        """Get human-readable plural, as used for index page titles."""
        plural_map = {
            TagKind.TAG: "Tags",
            TagKind.CATEGORY: "Categories",
            TagKind.SERIES: "Series",
        }
        return plural_map[self]

    @property
    def index_path(self) -> str:
        """URL of the index page listing every tag of this kind."""
        path_map = {
            TagKind.TAG: "/tags",
            TagKind.CATEGORY: "/categories",
            TagKind.SERIES: "/series",
        }
        return path_map[self]

    @property
    def sigil(self) -> str:
        """Prefix used when displaying a label of this kind."""
        sigil_map = {
            TagKind.TAG: "#",
            TagKind.CATEGORY: "@",
            TagKind.SERIES: "+",
        }
        return sigil_map[self]

    @property
    def css_class(self) -> str:
        """CSS class for inline tag links of this kind."""
        return f"tag-a-{self.value}"
