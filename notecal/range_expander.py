"""Multi-day (start/end date) expansion for notecal event drafts."""

import logging

from .date_utils import from_date_string, get_dates_between, to_date_string
from .models import EventDraft, Occurrence

logger = logging.getLogger(__name__)


class RangeExpander:
    """Expands a draft with an end date into one occurrence per covered day."""

    def expand(self, draft: EventDraft) -> list[Occurrence]:
        """Return occurrences from the anchor to the end date, inclusive.

        Without an end date the draft yields a single occurrence on its
        anchor. An end date before the anchor yields nothing. No occurrence
        is marked recurring.
        """
        if not draft.end_date_str:
            return [Occurrence.from_draft(draft, draft.date_str)]

        start = from_date_string(draft.date_str)
        end = from_date_string(draft.end_date_str)
        if start is None or end is None:
            return [Occurrence.from_draft(draft, draft.date_str)]

        days = get_dates_between(start, end)
        if not days:
            logger.debug(
                "End date %s precedes start %s in %s",
                draft.end_date_str,
                draft.date_str,
                draft.source_document_id,
            )
        return [Occurrence.from_draft(draft, to_date_string(day)) for day in days]
