"""Resolution of the recipients of a broadcast."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from bulletin.domain.entities import RecipientSelection
from bulletin.domain.errors import NoRecipientsError

logger = logging.getLogger(__name__)


class EligibilityDirectory(Protocol):
    """Source of the members allowed to receive announcements."""

    def list_eligible_user_ids(
        self, filter_ids: Iterable[int] | None = None
    ) -> set[int]: ...


def resolve_recipients(
    directory: EligibilityDirectory, selection: RecipientSelection
) -> frozenset[int]:
    """Return the de-duplicated set of approved recipients for ``selection``.

    Explicit ids that are not approved are dropped without error. Raises
    :class:`NoRecipientsError` when nothing is left.
    """

    if selection.send_to_all:
        recipients = frozenset(directory.list_eligible_user_ids())
    else:
        if not selection.user_ids:
            raise NoRecipientsError()
        recipients = frozenset(directory.list_eligible_user_ids(selection.user_ids))
        dropped = len(selection.user_ids - recipients)
        if dropped:
            logger.info(
                "Dropped %s of %s selected recipients without approved status",
                dropped,
                len(selection.user_ids),
            )

    if not recipients:
        raise NoRecipientsError()
    return recipients


__all__ = ["EligibilityDirectory", "resolve_recipients"]
