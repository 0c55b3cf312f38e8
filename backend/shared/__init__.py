"""
Shared module for common utilities used by the REST API and the CLI.

STRUCTURE:
- shared.infrastructure: Database and request correlation
  - db.py: SQLAlchemy engine/sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Limits, entity names, error kinds

- shared.utils: Utilities
  - exceptions.py: Domain exceptions with auto-logging
  - schemas.py: Shared Pydantic schemas

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Limits
    from shared.utils.exceptions import NotFoundError, DuplicateInScopeError
"""
