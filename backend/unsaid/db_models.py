# Import all models once to ensure SQLAlchemy mapper registry is fully populated.
# This prevents late-binding issues for relationship("ClassName") and secondary="table".

from .users.models import User  # noqa: F401
from .thoughts.models import Thought  # noqa: F401
from .tags.models import Tag, ThoughtTag  # noqa: F401
