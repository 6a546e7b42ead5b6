"""Best-effort special-category tagging of story groups."""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List

from ..models import StoryGroup

logger = logging.getLogger(__name__)


class CategoryProvider(ABC):
    """Source of special-category names."""

    @abstractmethod
    def list_special_category_names(self) -> List[str]:
        """Names of the special categories. May raise."""


class StaticCategoryProvider(CategoryProvider):
    """Fixed list of names, typically from the config file."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = list(names)

    def list_special_category_names(self) -> List[str]:
        return list(self.names)


def group_text(group: StoryGroup) -> List[str]:
    """Lowercased anchor titles and descriptions."""
    texts = []
    for article in group.anchors:
        for text in (article.title, article.description):
            if text:
                texts.append(text.lower())
    return texts


class SpecialCategoryTagger:
    """Attach special-category names found in a group's anchor text."""

    def __init__(self, provider: CategoryProvider) -> None:
        self.provider = provider

    def load_names(self) -> List[str]:
        """Category names, or an empty list if the provider fails."""
        try:
            names = self.provider.list_special_category_names()
        except Exception as e:
            logger.debug("Special categories unavailable, skipping tags: %s", e)
            return []
        return [str(n).strip() for n in names or [] if n is not None and str(n).strip()]

    def tag(self, groups: List[StoryGroup]) -> List[StoryGroup]:
        names = self.load_names()
        if not names:
            return groups

        tagged = []
        for group in groups:
            texts = group_text(group)
            tags = []
            for name in names:
                lower = name.lower()
                if name not in tags and any(lower in text for text in texts):
                    tags.append(name)
            tagged.append(group.model_copy(update={"tags": tags}) if tags else group)
        return tagged
