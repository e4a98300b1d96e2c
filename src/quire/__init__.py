"""quire - dynamic values, schemas and templates.

Three small libraries sharing one value model:

- ``quire.value``: the dynamic ``Value`` type and conversions into it
- ``quire.schema``: composable validators over values
- ``quire.template``: an embedded template language rendering values
"""

from ._version import __version__
from .exceptions import QuireError

__all__ = ["__version__", "QuireError"]
