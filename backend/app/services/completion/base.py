"""Base completion service interface."""

from abc import ABC, abstractmethod
from typing import List, Optional


def parse_tag_list(raw: str, max_tags: Optional[int] = None) -> List[str]:
    """Split a comma separated model answer into clean tags."""
    tags = [tag.strip() for tag in raw.split(",")]
    tags = [tag for tag in tags if tag]
    if max_tags is not None:
        tags = tags[:max_tags]
    return tags


class BaseCompletionService(ABC):
    """Abstract text completion capability used for summaries and tags."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def summarize(
        self, text: str, max_length: int, title: Optional[str] = None
    ) -> str:
        """Summarize text in at most max_length characters."""
        pass

    @abstractmethod
    async def generate_tags(self, text: str, max_tags: int) -> List[str]:
        """Suggest up to max_tags short tags for text."""
        pass
