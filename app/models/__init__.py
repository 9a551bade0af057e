# app/models/__init__.py
from app.db.base import Base  # noqa: F401

# order matters due to FKs
from . import category   # noqa: F401
from . import user       # noqa: F401
from . import responder  # noqa: F401
from . import report     # noqa: F401
from . import action     # noqa: F401
from . import audit_log  # noqa: F401
