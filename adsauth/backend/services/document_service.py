from __future__ import annotations

import logging
from typing import Dict, Optional

from adsauth.backend import config
from adsauth.backend.adstxt import (
	Document,
	DocumentBuilder,
	DocumentVariant,
	FailurePolicy,
	SellerRelationType,
	parse_document,
	serialize_document,
)
from adsauth.backend.schemas import DocumentPayload


logger = logging.getLogger(__name__)


class DocumentTooLargeError(Exception):
	def __init__(self, *, size: int, limit: int):
		super().__init__(f"Document is {size} bytes; the limit is {limit} bytes.")
		self.size = size
		self.limit = limit


def _check_size(content: str) -> None:
	size = len(content.encode("utf-8"))
	limit = config.max_document_bytes()
	if size > limit:
		raise DocumentTooLargeError(size=size, limit=limit)


def _policy(name: Optional[str]) -> FailurePolicy:
	if name is None:
		return config.default_policy()
	return FailurePolicy(name)


def summarize(document: Document) -> Dict[str, int]:
	direct = sum(1 for s in document.systems if s.account_type is SellerRelationType.DIRECT)
	return {
		"systems": len(document.systems),
		"direct": direct,
		"reseller": len(document.systems) - direct,
		"advertising_systems": len({s.domain_key for s in document.systems}),
		"contacts": len(document.contact),
		"manager_domains": len(document.manager_domain),
		"ext": len(document.ext),
	}


def _document_data(document: Document) -> Dict[str, object]:
	return {
		"document": document.as_dict(),
		"canonical": serialize_document(document),
		"summary": summarize(document),
	}


def parse(content: str, variant: str, policy: Optional[str] = None) -> Dict[str, object]:
	_check_size(content)
	document_variant = DocumentVariant.from_name(variant)
	failure_policy = _policy(policy)
	document = parse_document(content, document_variant, failure_policy)
	logger.info(
		"Parsed %s (%s): %d system(s)",
		document_variant.value,
		failure_policy.value,
		len(document.systems),
	)
	return _document_data(document)


def canonicalize(content: str, variant: str) -> Dict[str, object]:
	_check_size(content)
	document = parse_document(content, DocumentVariant.from_name(variant))
	return {"canonical": serialize_document(document)}


def build_from_payload(payload: DocumentPayload) -> Document:
	builder = DocumentBuilder(DocumentVariant.from_name(payload.variant))
	builder.contact(payload.contact)
	builder.subdomain(payload.subdomain)
	builder.inventory_partner_domain(payload.inventory_partner_domain)
	builder.owner_domain(payload.owner_domain)
	for entry in payload.manager_domain:
		builder.add_manager_domain(entry.domain, entry.country_code)
	for system in payload.systems:
		builder.add_system(
			system.domain,
			system.publisher_account_id,
			system.account_type,
			system.certification_authority_id,
		)
	for item in payload.ext:
		builder.add_ext(item.key, item.value)
	return builder.build()


def serialize(payload: DocumentPayload) -> Dict[str, object]:
	return _document_data(build_from_payload(payload))
