"""TransformPipeline: runs ordered transforms on a markdown body."""

from abc import ABC, abstractmethod

from mdbridge.obsidian.models import EnrichContext


class Transform(ABC):
    @abstractmethod
    def apply(self, content: str, context: EnrichContext) -> str:
        """Transform markdown content. context holds data derived from the source."""
        ...


class TransformPipeline:
    def __init__(self, transforms: list[Transform]):
        self.transforms = transforms

    def apply(self, content: str, context: EnrichContext) -> str:
        for t in self.transforms:
            content = t.apply(content, context)
        return content
