"""Tolerant parser for free-text bank notification SMS.

Messages follow a loose grammar::

    Rs <amount> <verb> [from|to|by|at <counterparty>] [via <channel>] [on <date>]. Ref No <token>

but banks drift in wording and ordering, so each field is extracted
independently and a field that cannot be found is simply left empty. The
parser never raises on malformed input.
"""

import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

from fintrack.core.clock import Clock, local_now
from fintrack.schemas.internal import Channel, Direction, ParsedTransaction

logger = logging.getLogger(__name__)


# Surface verbs normalised to a direction
CREDIT_VERBS = frozenset({"credited", "received", "deposited"})
DEBIT_VERBS = frozenset({"debited", "withdrawn", "sent"})

# Clause end: next " on", " via", " Ref", a full stop, or end of text
_CLAUSE_END = r"(?=\s+on\b|\s+via\b|\s+Ref\b|\.|$)"


def _clause(preposition: str) -> re.Pattern[str]:
    return re.compile(
        rf"\b{preposition}\s+([A-Za-z0-9][A-Za-z0-9&'\-\s]*?){_CLAUSE_END}",
        re.IGNORECASE,
    )


class SmsParser:
    """Extracts amount, direction, counterparty, channel and reference.

    Example:
        >>> parser = SmsParser()
        >>> txn = parser.parse("Rs 500 received from Rahul Sharma via UPI. Ref No 9999")
        >>> txn.direction, txn.counterparty
        (<Direction.CREDIT: 'credit'>, 'Rahul Sharma')
    """

    # More than two decimals leaves the amount absent rather than truncated
    AMOUNT_PATTERN = re.compile(r"\bRs\.?\s?(\d[\d,]*(?:\.\d{1,2})?)(?!\.?\d)", re.IGNORECASE)
    VERB_PATTERN = re.compile(
        r"\b(debited|credited|withdrawn|deposited|received|sent)\b", re.IGNORECASE
    )
    VIA_CHANNEL_PATTERN = re.compile(
        r"\bvia\s+(UPI|NEFT|IMPS|RTGS|ATM|POS|Net\s?Banking)\b", re.IGNORECASE
    )
    CHANNEL_PATTERN = re.compile(
        r"\b(UPI|NEFT|IMPS|RTGS|ATM|POS|Net\s?Banking)\b", re.IGNORECASE
    )
    REF_PATTERN = re.compile(
        r"\bRef(?:erence)?\b\.?\s*(?:No\b\.?)?\s*[:#-]?\s*((?!No\b)[A-Za-z0-9]+)",
        re.IGNORECASE,
    )

    # Credit: the source is the counterparty. Debit: the destination is.
    CREDIT_CLAUSES = (_clause("from"), _clause("by"))
    DEBIT_CLAUSES = (_clause("to"), _clause("at"))

    def __init__(self, clock: Clock | None = None):
        self.clock = clock or local_now

    def parse(self, raw: str, observed_at: datetime | None = None) -> ParsedTransaction:
        """Parse one message into a (possibly partial) ParsedTransaction.

        Args:
            raw: Message text as received
            observed_at: Observation time; defaults to the parser clock

        Returns:
            ParsedTransaction with absent fields left as None
        """
        text = raw if isinstance(raw, str) else ("" if raw is None else str(raw))
        direction = self._find_direction(text)

        parsed = ParsedTransaction(
            amount=self._find_amount(text),
            direction=direction,
            counterparty=self._find_counterparty(text, direction),
            channel=self._find_channel(text),
            reference_id=self._find_reference(text),
            observed_at=observed_at or self.clock(),
            raw_text=text,
        )
        logger.debug(
            "Parsed SMS",
            extra={
                "has_amount": parsed.amount is not None,
                "direction": parsed.direction.value if parsed.direction else None,
                "has_counterparty": parsed.counterparty is not None,
            },
        )
        return parsed

    def _find_amount(self, text: str) -> Decimal | None:
        match = self.AMOUNT_PATTERN.search(text)
        if not match:
            return None
        try:
            return Decimal(match.group(1).replace(",", ""))
        except InvalidOperation:
            return None

    def _find_direction(self, text: str) -> Direction | None:
        match = self.VERB_PATTERN.search(text)
        if not match:
            return None
        verb = match.group(1).lower()
        if verb in CREDIT_VERBS:
            return Direction.CREDIT
        if verb in DEBIT_VERBS:
            return Direction.DEBIT
        return None

    def _find_counterparty(self, text: str, direction: Direction | None) -> str | None:
        # The same message can hold both a "to" and an "at" (or "from") clause
        # in different roles; the verb decides which one names the other party.
        clauses = self.CREDIT_CLAUSES if direction == Direction.CREDIT else self.DEBIT_CLAUSES
        for pattern in clauses:
            match = pattern.search(text)
            if match:
                name = re.sub(r"\s+", " ", match.group(1)).strip()
                if name:
                    return name
        return None

    def _find_channel(self, text: str) -> Channel | None:
        match = self.VIA_CHANNEL_PATTERN.search(text) or self.CHANNEL_PATTERN.search(text)
        if not match:
            return None
        token = re.sub(r"\s+", "", match.group(1)).upper()
        return Channel(token)

    def _find_reference(self, text: str) -> str | None:
        match = self.REF_PATTERN.search(text)
        return match.group(1) if match else None


_default_parser = SmsParser()


def parse_sms(raw: str, observed_at: datetime | None = None) -> ParsedTransaction:
    """Parse a message with the module-level parser (local clock)."""
    return _default_parser.parse(raw, observed_at=observed_at)
