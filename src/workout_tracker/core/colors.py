"""Stable category → color assignment."""

from collections.abc import Iterable, Sequence

from .config import CATEGORY_PALETTE
from .models import Category


class CategoryColors:
    """
    Ordered, memoized mapping from category id to a palette color.

    Ids are assigned the next palette entry (wrapping around) the first
    time they are seen. Seeding from the catalog order keeps colors
    stable across reloads as long as the category order is unchanged.
    """

    def __init__(self, palette: Sequence[str] = CATEGORY_PALETTE):
        if not palette:
            raise ValueError("palette must contain at least one color")
        self.palette = tuple(palette)
        self._assigned: dict[str, str] = {}

    @classmethod
    def from_catalog(
        cls,
        categories: Iterable[Category],
        palette: Sequence[str] = CATEGORY_PALETTE,
    ) -> "CategoryColors":
        colors = cls(palette)
        colors.seed(categories)
        return colors

    def seed(self, categories: Iterable[Category]) -> None:
        """Pre-assign colors in catalog order."""
        for cat in categories:
            self.color_of(cat.id)

    def color_of(self, category_id: str) -> str:
        if category_id not in self._assigned:
            idx = len(self._assigned) % len(self.palette)
            self._assigned[category_id] = self.palette[idx]
        return self._assigned[category_id]

    def as_dict(self) -> dict[str, str]:
        return dict(self._assigned)
