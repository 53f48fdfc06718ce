"""
Commitment reference numbers.

A reference number is YYYY-MM-NNN: the year and month of the commitment's
due date, then a sequence that restarts at 001 every month in every
company.

The next number is computed by reading the current maximum and adding one,
and the insert happens afterwards. Two requests creating commitments for
the same company and month at the same moment could therefore compute the
same number. Creation runs in a BEGIN IMMEDIATE transaction, so the read
and the insert hold the store's write lock and concurrent creations queue
up behind it. If the number is taken anyway (a caller that already had a
transaction open) the unique constraint on commit_number rejects the
insert, and a writer that waits past the connection timeout gives up.
Both surface as a conflict; nothing is retried and no duplicate is stored.
"""

from datetime import date, datetime
from typing import Optional, Union

from app.errors import ValidationError
from app.repositories.commitment_repository import CommitmentRepository

SEQUENCE_WIDTH = 3


def parse_due_date(value: Union[date, str, None]) -> date:
    """
    Accept a date or an ISO YYYY-MM-DD string.

    Raises:
        ValidationError: if the value is missing or not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            pass
    raise ValidationError(
        "due_date must be a valid date in YYYY-MM-DD format",
        {"due_date": None if value is None else str(value)},
    )


def number_prefix(due_date: date) -> str:
    return f"{due_date.year:04d}-{due_date.month:02d}-"


def format_commit_number(year: int, month: int, sequence: int) -> str:
    return f"{year:04d}-{month:02d}-{sequence:0{SEQUENCE_WIDTH}d}"


def next_sequence(previous: Optional[str], prefix: str) -> int:
    """Sequence following previous; 1 when there is none or it cannot be parsed."""
    if not previous or not previous.startswith(prefix):
        return 1
    try:
        return int(previous[len(prefix):]) + 1
    except ValueError:
        return 1


async def next_commit_number(
    repository: CommitmentRepository,
    due_date: Union[date, str, None],
) -> str:
    """
    Next reference number for a commitment due on due_date.

    The date is validated before the store is queried.
    """
    due = parse_due_date(due_date)
    prefix = number_prefix(due)
    previous = await repository.max_number_with_prefix(prefix)
    return format_commit_number(due.year, due.month, next_sequence(previous, prefix))
