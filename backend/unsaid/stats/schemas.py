from ..models import CustomModel


class Stats(CustomModel):
    total_thoughts: int
    total_tags: int
    total_words: int
    total_views: int
