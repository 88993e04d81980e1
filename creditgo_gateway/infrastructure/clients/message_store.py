"""Device inbox reader for exported SMS stores"""

import json
import logging
from pathlib import Path
from typing import List, Protocol

from creditgo_gateway.config import settings
from creditgo_gateway.domain.exceptions import MessageStoreUnavailableError
from creditgo_gateway.domain.models import RawMessage, SmsImportResult
from creditgo_gateway.domain.sms_parser import filter_bank_alerts, parse_bank_sms_to_transactions
from creditgo_gateway.infrastructure.observability.metrics import message_import_failures_counter
from creditgo_gateway.utils.date_utils import from_epoch_millis

UNAVAILABLE_MESSAGE = (
    "Could not read SMS. Make sure a message export is available and SMS access has been granted."
)


class MessageSource(Protocol):
    def read_messages(self, max_count: int = 200) -> List[RawMessage]: ...


class MessageStoreReader:
    """
    Reads an inbox export: a JSON array of
    {"_id": str, "body": str, "date": epoch-millis, "address": str}.
    """

    def __init__(self, export_path: str | Path | None = None):
        path = export_path or settings.message_export_path
        self.export_path = Path(path) if path else None

    def read_messages(self, max_count: int = 200) -> List[RawMessage]:
        """
        Load up to max_count inbox messages.

        Raises:
            MessageStoreUnavailableError: export missing, unreadable or malformed
        """
        if self.export_path is None:
            raise MessageStoreUnavailableError("No message export configured")

        try:
            raw = json.loads(self.export_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise MessageStoreUnavailableError(f"Cannot read message export: {e}") from e
        except json.JSONDecodeError as e:
            raise MessageStoreUnavailableError(f"Message export is not valid JSON: {e}") from e

        if not isinstance(raw, list):
            raise MessageStoreUnavailableError("Message export must be a JSON array")

        try:
            return [
                RawMessage(
                    body=str(sms["body"]),
                    date=from_epoch_millis(int(sms["date"])),
                    address=str(sms.get("address") or ""),
                    message_id=str(sms.get("_id", index)),
                )
                for index, sms in enumerate(raw[:max_count])
            ]
        except (KeyError, ValueError, TypeError, AttributeError, OverflowError, OSError) as e:
            raise MessageStoreUnavailableError(f"Invalid message record in export: {e}") from e


def analyze_device_messages(source: MessageSource, max_count: int = 200) -> SmsImportResult:
    """
    Read, filter and parse a device inbox.

    Best effort: a failing or empty store yields success=False with a
    user-facing error instead of raising.
    """
    try:
        messages = source.read_messages(max_count)
    except MessageStoreUnavailableError as e:
        message_import_failures_counter.inc()
        logging.warning(f"Message store unavailable: {e}", extra={"step": "sms_import"})
        return SmsImportResult(success=False, transactions=(), error=UNAVAILABLE_MESSAGE)

    if not messages:
        message_import_failures_counter.inc()
        logging.warning("Message store is empty", extra={"step": "sms_import"})
        return SmsImportResult(success=False, transactions=(), error=UNAVAILABLE_MESSAGE)

    alerts = filter_bank_alerts(messages)
    transactions = parse_bank_sms_to_transactions(alerts)
    logging.info(
        "Device messages imported",
        extra={
            "step": "sms_import",
            "message_count": len(messages),
            "alert_count": len(alerts),
            "transaction_count": len(transactions),
        },
    )

    return SmsImportResult(success=True, transactions=tuple(transactions))
