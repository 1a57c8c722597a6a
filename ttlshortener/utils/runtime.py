"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the application runs in the local environment, False otherwise.

Example:
    >>> from ttlshortener.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'prod'
    >>> running_locally()
    False
"""

import os

from ttlshortener.constants import ENV


def running_locally() -> bool:
    """Check if the application is running locally (APP_ENV unset or 'local')

    Returns:
        bool: True if running locally, False otherwise.
    """
    return os.getenv(ENV.App.APP_ENV, 'local').lower() == 'local'
