"""lms-modules - module groups and modules of an LMS admin menu.

Persistent schema, storage access and serialization for the menu hierarchy:
module groups own modules, modules own functions.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
