# ============================================================================
# FILE: mixtape/db/transaction.py
# ============================================================================
"""
Read-validate-write helper.

Playlists and users carry a version column, so a commit that raced another
writer fails with StaleDataError instead of silently overwriting. The whole
operation (reads included) is then re-run against fresh rows, which re-checks
every invariant before writing again.
"""
from typing import Callable, Optional, TypeVar
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from mixtape.core.exceptions import ConflictError, MixtapeError
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_in_transaction(
    db: Session,
    operation: Callable[[], T],
    attempts: int = 3,
    description: str = "write",
    integrity_message: Optional[str] = None,
) -> T:
    """
    Run `operation` and commit, retrying on lost optimistic-lock races

    Args:
        db: Session the operation reads and writes through
        operation: Callable doing the reads, checks and writes (no commit)
        attempts: Total tries before giving up with ConflictError
        description: Used in log lines
        integrity_message: If set, a unique-constraint violation becomes a
            ConflictError with this message instead of being retried

    Returns:
        Whatever `operation` returned on the successful attempt
    """
    for attempt in range(1, attempts + 1):
        try:
            result = operation()
            db.commit()
            return result
        except StaleDataError:
            db.rollback()
            logger.warning(f"Concurrent update during {description} (attempt {attempt}/{attempts}), retrying")
        except IntegrityError as e:
            db.rollback()
            if integrity_message is not None:
                logger.warning(f"Constraint violation during {description}: {integrity_message}")
                raise ConflictError(integrity_message) from e
            logger.warning(f"Constraint race during {description} (attempt {attempt}/{attempts}), retrying")
        except MixtapeError:
            db.rollback()
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"Error during {description}: {e}")
            raise
    raise ConflictError(f"Concurrent modification during {description}, please retry")
