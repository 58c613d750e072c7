from ..models import CustomModel


class TagOut(CustomModel):
    id: str
    name: str
    slug: str


class TagWithCount(TagOut):
    """A tag with the number of published thoughts that carry it."""
    count: int
