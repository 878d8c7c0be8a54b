# adsauth/backend/adstxt/serializer.py
from __future__ import annotations

from typing import List

from . import lines
from .types import AuthorizedSystem, Document, DocumentVariant, ManagerDomainEntry
from .validator import parse_document


LINE_END = "\n"


def render_system(system: AuthorizedSystem) -> str:
	fields = [system.domain, system.publisher_account_id, system.account_type.value]
	if system.certification_authority_id:
		fields.append(system.certification_authority_id)
	return ", ".join(fields)


def render_manager_domain(entry: ManagerDomainEntry) -> str:
	if entry.country_code:
		return f"{lines.MANAGERDOMAIN}={entry.domain}, {entry.country_code}"
	return f"{lines.MANAGERDOMAIN}={entry.domain}"


def render_variables(document: Document) -> List[str]:
	rendered = [f"{lines.CONTACT}={value}" for value in document.contact]
	if document.subdomain is not None:
		rendered.append(f"{lines.SUBDOMAIN}={document.subdomain}")
	if document.inventory_partner_domain is not None:
		rendered.append(f"{lines.INVENTORYPARTNERDOMAIN}={document.inventory_partner_domain}")
	if document.variant is DocumentVariant.ADS_TXT:
		if document.owner_domain is not None:
			rendered.append(f"{lines.OWNERDOMAIN}={document.owner_domain}")
		rendered.extend(render_manager_domain(entry) for entry in document.manager_domain)
	rendered.extend(f"{item.key}={item.value}" for item in document.ext)
	return rendered


def serialize_document(document: Document) -> str:
	"""Render ``document`` in canonical form.

	Variables come first (CONTACT, SUBDOMAIN, INVENTORYPARTNERDOMAIN, then the
	ads.txt-only OWNERDOMAIN and MANAGERDOMAIN, then unrecognized directives),
	a blank line, then one record per system in stored order. Comments and
	the original layout are not reproduced.
	"""
	output = render_variables(document)
	if output and document.systems:
		output.append("")
	output.extend(render_system(system) for system in document.systems)
	if not output:
		return ""
	return LINE_END.join(output) + LINE_END


def canonicalize(text: str, variant: DocumentVariant) -> str:
	return serialize_document(parse_document(text, variant))
