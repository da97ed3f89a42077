from .constants import VINE_VERSION as __version__
from .editor import Editor, run

__all__ = ["Editor", "run", "__version__"]
