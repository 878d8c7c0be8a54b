from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from adsauth.backend.response import success_response
from adsauth.backend.schemas import (
	ApiEnvelope,
	CanonicalizeRequest,
	ParseDocumentRequest,
	SerializeDocumentRequest,
)
from adsauth.backend.services import document_service
from adsauth.backend.services.document_service import DocumentTooLargeError


router = APIRouter(prefix="/api/documents", tags=["documents"])


def _too_large(exc: DocumentTooLargeError) -> HTTPException:
	return HTTPException(
		status_code=413,
		detail={"code": "document_too_large", "message": str(exc)},
	)


@router.post("/parse", response_model=ApiEnvelope)
def parse_document(request: Request, payload: ParseDocumentRequest):
	try:
		data = document_service.parse(payload.content, payload.variant, payload.policy)
	except DocumentTooLargeError as exc:
		raise _too_large(exc) from exc
	return success_response(request=request, data=data)


@router.post("/canonicalize", response_model=ApiEnvelope)
def canonicalize_document(request: Request, payload: CanonicalizeRequest):
	try:
		data = document_service.canonicalize(payload.content, payload.variant)
	except DocumentTooLargeError as exc:
		raise _too_large(exc) from exc
	return success_response(request=request, data=data)


@router.post("/serialize", response_model=ApiEnvelope)
def serialize_document(request: Request, payload: SerializeDocumentRequest):
	data = document_service.serialize(payload.document)
	return success_response(request=request, data=data)
