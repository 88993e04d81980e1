"""SMS transaction endpoints - parse, demo inbox and device import"""

from typing import List, Optional, Sequence

from fastapi import APIRouter, Depends

from creditgo_gateway.api.dependencies import get_demo_source, get_message_reader
from creditgo_gateway.api.v1.schemas import (
    AnalysisSchema,
    ImportRequest,
    ImportResponse,
    MessageSchema,
    ParseRequest,
    TransactionSchema,
    TransactionsResponse,
)
from creditgo_gateway.config import settings
from creditgo_gateway.domain.analysis import analyze_transactions
from creditgo_gateway.domain.models import RawMessage, Transaction, TransactionAnalysis
from creditgo_gateway.domain.sms_parser import (
    filter_bank_alerts,
    parse_bank_sms_to_transactions,
    parse_sms_transactions,
)
from creditgo_gateway.infrastructure.clients.demo_messages import DemoMessageSource
from creditgo_gateway.infrastructure.clients.message_store import MessageStoreReader, analyze_device_messages
from creditgo_gateway.infrastructure.observability.metrics import record_sms_parse

router = APIRouter()


def analyze_request_messages(
    messages: Optional[List[MessageSchema]],
    use_demo_sms: bool,
    demo_source: DemoMessageSource,
) -> Optional[TransactionAnalysis]:
    """
    SMS evidence for a profile or credit-limit request.

    Caller messages win; the demo inbox is used only when asked for and
    demo mode is on. Returns None when there is no evidence at all.
    """
    if messages is not None:
        raw = [RawMessage(body=m.body, date=m.date, address=m.address) for m in messages]
    elif use_demo_sms and settings.demo_mode:
        raw = demo_source.read_messages(settings.sms_max_messages)
    else:
        return None

    transactions = parse_sms_transactions(raw)
    record_sms_parse(len(raw), len(transactions))
    return analyze_transactions(transactions)


def _analysis_response(transactions: Sequence[Transaction]) -> TransactionsResponse:
    analysis = analyze_transactions(transactions)
    return TransactionsResponse(
        transactions=[TransactionSchema.model_validate(t) for t in transactions],
        analysis=AnalysisSchema.model_validate(analysis),
    )


@router.post("/transactions/parse", response_model=TransactionsResponse)
def parse_transactions(request_body: ParseRequest):
    """
    Parse bank alert text into transactions and income statistics.

    With filter_bank_alerts, messages must first look like bank alerts
    (sender or content) and are parsed with the wider device patterns.
    Unrecognized messages are dropped, never reported as errors.
    """
    messages = [
        RawMessage(body=m.body, date=m.date, address=m.address)
        for m in request_body.messages
    ]

    if request_body.filter_bank_alerts:
        transactions = parse_bank_sms_to_transactions(filter_bank_alerts(messages))
    else:
        transactions = parse_sms_transactions(messages)

    record_sms_parse(len(messages), len(transactions))
    return _analysis_response(transactions)


@router.get("/transactions/demo", response_model=TransactionsResponse)
def demo_transactions(source: DemoMessageSource = Depends(get_demo_source)):
    """Parse and analyze the fixed three-month demo inbox"""
    messages = source.read_messages(settings.sms_max_messages)
    transactions = parse_sms_transactions(messages)
    record_sms_parse(len(messages), len(transactions))
    return _analysis_response(transactions)


@router.post("/transactions/import", response_model=ImportResponse)
def import_transactions(
    request_body: ImportRequest,
    reader: MessageStoreReader = Depends(get_message_reader),
):
    """
    Import bank alerts from the device inbox export.

    Always 200: an unavailable store is reported with success=false.
    """
    result = analyze_device_messages(reader, request_body.max_count)
    if not result.success:
        return ImportResponse(success=False, transactions=[], error=result.error)

    return ImportResponse(
        success=True,
        transactions=[TransactionSchema.model_validate(t) for t in result.transactions],
        analysis=AnalysisSchema.model_validate(analyze_transactions(result.transactions)),
    )
