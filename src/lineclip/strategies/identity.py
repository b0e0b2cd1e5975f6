"""Plain-text messages."""

from ..models.content import Content, SourceType


class IdentityStrategy:
    """Returns the message itself as title and body, without network access."""

    async def resolve(self, text: str) -> Content:
        return Content(title=text, content=text, source=SourceType.LINE, tags=())
