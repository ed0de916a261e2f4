from __future__ import annotations

from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_quote_repository
from app.core.logging import get_logger
from app.models.quote import InternationalQuote
from app.repositories.quote_repo import QuoteRepository
from app.schemas.quote import (
    BreakdownResponse,
    QuoteDetail,
    QuoteDocumentResponse,
    QuoteForm,
    QuoteHistory,
    QuoteRead,
)
from app.services.quote_document import build_document
from app.services.quote_engine import (
    charges_from_form,
    compute_breakdown,
    missing_fields,
    parse_charge_or_zero,
)

router = APIRouter(prefix="/international", tags=["international"])
logger = get_logger()


@router.post("/calculate", response_model=BreakdownResponse)
async def calculate(payload: QuoteForm):
    form = payload.model_dump()
    missing = missing_fields(form)
    breakdown = compute_breakdown(charges_from_form(form))
    return BreakdownResponse(margins=breakdown.as_strings(), is_complete=not missing, missing_fields=missing)


@router.post("/document", response_model=QuoteDocumentResponse)
async def quote_document(payload: QuoteForm):
    form = payload.model_dump()
    document = build_document(compute_breakdown(charges_from_form(form)), form)
    return QuoteDocumentResponse.model_validate(asdict(document))


@router.post("/save", response_model=QuoteRead, status_code=status.HTTP_201_CREATED)
async def save_quote(payload: QuoteForm, repo: QuoteRepository = Depends(get_quote_repository)):
    form = payload.model_dump()
    missing = missing_fields(form)
    if missing:
        logger.info("quote_save_rejected", missing_fields=missing)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Quote is incomplete", "missing_fields": missing},
        )

    quote = InternationalQuote(
        customer_name=payload.customer_name.strip(),
        origin_city=payload.origin_city.strip(),
        origin_port=payload.origin_port.strip(),
        destination_city=payload.destination_city.strip(),
        destination_country=payload.destination_country.strip(),
        destination_port=payload.destination_port.strip(),
        mode=payload.mode.strip(),
        volume_cbm=None if payload.volume_cbm in (None, "") else str(payload.volume_cbm),
        packing_charges=parse_charge_or_zero(payload.packing_charges),
        handling_charges=parse_charge_or_zero(payload.handling_charges),
        origin_charges_custom=parse_charge_or_zero(payload.origin_charges_custom),
        ocean_freight=parse_charge_or_zero(payload.ocean_freight),
        dthc=parse_charge_or_zero(payload.dthc),
        destination_charges=parse_charge_or_zero(payload.destination_charges),
        apply_vendor_gst=payload.apply_vendor_gst,
    )
    quote = await repo.create(quote)
    logger.info("quote_saved", quote_id=str(quote.id), customer_name=quote.customer_name)
    return QuoteRead.model_validate(quote)


@router.get("/history", response_model=QuoteHistory)
async def history(repo: QuoteRepository = Depends(get_quote_repository)):
    quotes = await repo.list()
    return QuoteHistory(data=[QuoteRead.model_validate(quote) for quote in quotes])


@router.get("/quotes/{quote_id}", response_model=QuoteDetail)
async def get_quote(quote_id: str, repo: QuoteRepository = Depends(get_quote_repository)):
    quote = await _get_or_404(repo, quote_id)
    breakdown = compute_breakdown(charges_from_form(_stored_form(quote)))
    return QuoteDetail(quote=QuoteRead.model_validate(quote), margins=breakdown.as_strings())


@router.get("/quotes/{quote_id}/document", response_model=QuoteDocumentResponse)
async def get_quote_document(quote_id: str, repo: QuoteRepository = Depends(get_quote_repository)):
    quote = await _get_or_404(repo, quote_id)
    form = _stored_form(quote)
    document = build_document(compute_breakdown(charges_from_form(form)), form)
    return QuoteDocumentResponse.model_validate(asdict(document))


async def _get_or_404(repo: QuoteRepository, quote_id: str) -> InternationalQuote:
    try:
        quote = await repo.get(quote_id)
    except ValueError:
        quote = None
    if not quote:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quote not found")
    return quote


def _stored_form(quote: InternationalQuote) -> dict:
    return QuoteRead.model_validate(quote).model_dump()
