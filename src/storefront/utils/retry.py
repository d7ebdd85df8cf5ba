"""Optimistic-concurrency retry for commands that modify an existing aggregate.

Repositories save whole aggregates and reject a save whose version is stale
with ``ExpectedVersionError``. Re-processing the command loads a fresh copy,
so appends made by a concurrent writer (status history entries, cart line
merges) survive instead of being overwritten.
"""

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)

DEFAULT_ATTEMPTS = 3


def process_with_retry(command, attempts: int = DEFAULT_ATTEMPTS):
    """Process ``command`` synchronously, retrying on version conflicts.

    Returns whatever the command handler returns. The last
    ``ExpectedVersionError`` propagates once ``attempts`` are exhausted.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    for attempt in range(1, attempts + 1):
        try:
            return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError:
            if attempt == attempts:
                logger.error(
                    "Version conflict persisted, giving up",
                    command=command.__class__.__name__,
                    attempts=attempts,
                )
                raise
            logger.warning(
                "Version conflict, retrying command",
                command=command.__class__.__name__,
                attempt=attempt,
            )
