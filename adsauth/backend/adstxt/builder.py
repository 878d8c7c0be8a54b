# adsauth/backend/adstxt/builder.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

from .errors import BuildError, BuildViolation, BuildViolationKind
from .lines import COMMENT_CHAR, KNOWN_DIRECTIVES, is_variable_text
from .records import is_valid_certification_id
from .types import (
	AuthorizedSystem,
	Document,
	DocumentVariant,
	ExtensionVariable,
	ManagerDomainEntry,
	SellerRelationType,
	normalize_country_code,
)


_EXT_KEY_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_\-]*$")
_LINE_BREAKS = ("\n", "\r")


@dataclass
class _StagedSystem:
	domain: Any
	publisher_account_id: Any
	account_type: Any
	certification_authority_id: Any = None


@dataclass
class _StagedManager:
	domain: Any
	country_code: Any = None


def _text(value: Any) -> str:
	return "" if value is None else str(value).strip()


def _breaks_line(value: str) -> bool:
	return COMMENT_CHAR in value or any(ch in value for ch in _LINE_BREAKS)


class DocumentBuilder:
	"""Staging area for a Document.

	Setters accept anything and never fail; ``build()`` normalizes the staged
	values the same way the parser would and raises a single ``BuildError``
	listing every violation. Calling ``subdomain()`` twice with different
	values is kept as a conflict until ``build()`` reports it.
	"""

	def __init__(self, variant: DocumentVariant = DocumentVariant.ADS_TXT):
		self.variant = variant
		self._contact: List[Any] = []
		self._subdomains: List[Any] = []
		self._inventory_partner_domain: Any = None
		self._owner_domain: Any = None
		self._managers: List[_StagedManager] = []
		self._systems: List[_StagedSystem] = []
		self._ext: List[Tuple[Any, Any]] = []

	@classmethod
	def from_document(cls, document: Document) -> "DocumentBuilder":
		builder = cls(document.variant)
		builder.contact(document.contact)
		builder.subdomain(document.subdomain)
		builder.inventory_partner_domain(document.inventory_partner_domain)
		builder.owner_domain(document.owner_domain)
		for entry in document.manager_domain:
			builder.add_manager_domain(entry.domain, entry.country_code)
		builder.systems(document.systems)
		for item in document.ext:
			builder.add_ext(item.key, item.value)
		return builder

	def as_variant(self, variant: DocumentVariant) -> "DocumentBuilder":
		self.variant = variant
		return self

	def contact(self, values: Iterable[Any]) -> "DocumentBuilder":
		self._contact = list(values)
		return self

	def add_contact(self, value: Any) -> "DocumentBuilder":
		self._contact.append(value)
		return self

	def subdomain(self, value: Any) -> "DocumentBuilder":
		if value is None:
			self._subdomains = []
		else:
			self._subdomains.append(value)
		return self

	def inventory_partner_domain(self, value: Any) -> "DocumentBuilder":
		self._inventory_partner_domain = value
		return self

	def owner_domain(self, value: Any) -> "DocumentBuilder":
		self._owner_domain = value
		return self

	def manager_domain(self, entries: Iterable[ManagerDomainEntry]) -> "DocumentBuilder":
		self._managers = [_StagedManager(entry.domain, entry.country_code) for entry in entries]
		return self

	def add_manager_domain(self, domain: Any, country_code: Any = None) -> "DocumentBuilder":
		self._managers.append(_StagedManager(domain, country_code))
		return self

	def systems(self, systems: Iterable[AuthorizedSystem]) -> "DocumentBuilder":
		self._systems = [
			_StagedSystem(
				system.domain,
				system.publisher_account_id,
				system.account_type,
				system.certification_authority_id,
			)
			for system in systems
		]
		return self

	def add_system(
		self,
		domain: Any,
		publisher_account_id: Any,
		account_type: Any,
		certification_authority_id: Any = None,
	) -> "DocumentBuilder":
		self._systems.append(
			_StagedSystem(domain, publisher_account_id, account_type, certification_authority_id)
		)
		return self

	def add_ext(self, key: Any, value: Any) -> "DocumentBuilder":
		self._ext.append((key, value))
		return self

	def build(self) -> Document:
		violations: List[BuildViolation] = []

		def violate(kind: BuildViolationKind, field: str, message: str) -> None:
			violations.append(BuildViolation(kind=kind, field=field, message=message))

		def directive_value(field: str, raw: Any) -> str:
			value = _text(raw)
			if not value:
				violate(BuildViolationKind.EMPTY_VALUE, field, "Value is empty.")
			elif _breaks_line(value):
				violate(BuildViolationKind.UNSERIALIZABLE_VALUE, field, "Value contains '#' or a line break.")
			return value

		contact = tuple(directive_value(f"contact[{i}]", raw) for i, raw in enumerate(self._contact))

		subdomain: Optional[str] = None
		staged_subdomains = [_text(raw) for raw in self._subdomains]
		if not all(staged_subdomains):
			violate(BuildViolationKind.EMPTY_VALUE, "subdomain", "Value is empty.")
		distinct = {value.lower() for value in staged_subdomains if value}
		if len(distinct) > 1:
			violate(
				BuildViolationKind.MULTIPLE_SUBDOMAINS,
				"subdomain",
				f"At most one subdomain is allowed, got {len(distinct)}.",
			)
		elif distinct:
			first = next(value for value in staged_subdomains if value)
			subdomain = directive_value("subdomain", first).lower()

		inventory_partner_domain: Optional[str] = None
		if self._inventory_partner_domain is not None:
			inventory_partner_domain = directive_value(
				"inventory_partner_domain", self._inventory_partner_domain
			).lower()

		owner_domain: Optional[str] = None
		if self._owner_domain is not None:
			if self.variant is DocumentVariant.APP_ADS_TXT:
				violate(
					BuildViolationKind.FORBIDDEN_FIELD,
					"owner_domain",
					f"OWNERDOMAIN is not allowed in {self.variant.value}.",
				)
			owner_domain = directive_value("owner_domain", self._owner_domain)

		if self._managers and self.variant is DocumentVariant.APP_ADS_TXT:
			violate(
				BuildViolationKind.FORBIDDEN_FIELD,
				"manager_domain",
				f"MANAGERDOMAIN is not allowed in {self.variant.value}.",
			)
		managers: List[ManagerDomainEntry] = []
		for idx, staged in enumerate(self._managers):
			field = f"manager_domain[{idx}]"
			domain = directive_value(f"{field}.domain", staged.domain)
			if "," in domain:
				violate(BuildViolationKind.UNSERIALIZABLE_VALUE, f"{field}.domain", "Domain contains ','.")
			country_code = None
			raw_code = _text(staged.country_code)
			if raw_code:
				country_code = normalize_country_code(raw_code)
				if country_code is None:
					violate(
						BuildViolationKind.INVALID_COUNTRY_CODE,
						f"{field}.country_code",
						f"Expected a two-letter country code, got {raw_code!r}.",
					)
			managers.append(ManagerDomainEntry(domain=domain, country_code=country_code))

		systems: List[AuthorizedSystem] = []
		for idx, staged in enumerate(self._systems):
			field = f"systems[{idx}]"
			seen = len(violations)
			domain = _text(staged.domain)
			if not domain:
				violate(BuildViolationKind.EMPTY_DOMAIN, f"{field}.domain", "Domain is empty.")
			elif "," in domain or _breaks_line(domain) or is_variable_text(domain):
				violate(
					BuildViolationKind.UNSERIALIZABLE_VALUE,
					f"{field}.domain",
					"Domain cannot be rendered as a record field.",
				)
			account_id = _text(staged.publisher_account_id)
			if not account_id:
				violate(
					BuildViolationKind.EMPTY_ACCOUNT_ID,
					f"{field}.publisher_account_id",
					"Publisher account id is empty.",
				)
			elif "," in account_id or _breaks_line(account_id):
				violate(
					BuildViolationKind.UNSERIALIZABLE_VALUE,
					f"{field}.publisher_account_id",
					"Publisher account id cannot be rendered as a record field.",
				)
			account_type = staged.account_type
			if not isinstance(account_type, SellerRelationType):
				try:
					account_type = SellerRelationType.from_token(_text(account_type))
				except ValueError:
					violate(
						BuildViolationKind.INVALID_ACCOUNT_TYPE,
						f"{field}.account_type",
						f"Expected DIRECT or RESELLER, got {staged.account_type!r}.",
					)
					account_type = None
			cert_id = _text(staged.certification_authority_id) or None
			if cert_id is not None and (not is_valid_certification_id(cert_id) or _breaks_line(cert_id)):
				violate(
					BuildViolationKind.INVALID_CERTIFICATION_ID,
					f"{field}.certification_authority_id",
					"Certification authority id must be a single token.",
				)
			if len(violations) == seen:
				systems.append(
					AuthorizedSystem(
						domain=domain,
						publisher_account_id=account_id,
						account_type=account_type,
						certification_authority_id=cert_id,
					)
				)

		ext: List[ExtensionVariable] = []
		for idx, (raw_key, raw_value) in enumerate(self._ext):
			key = _text(raw_key)
			if not _EXT_KEY_RE.match(key) or key.upper() in KNOWN_DIRECTIVES:
				violate(
					BuildViolationKind.RESERVED_EXT_KEY,
					f"ext[{idx}].key",
					f"{key!r} is not usable as an extension directive name.",
				)
			value = _text(raw_value)
			if _breaks_line(value):
				violate(
					BuildViolationKind.UNSERIALIZABLE_VALUE,
					f"ext[{idx}].value",
					"Value contains '#' or a line break.",
				)
			ext.append(ExtensionVariable(key=key, value=value))

		if violations:
			raise BuildError(violations)
		return Document(
			variant=self.variant,
			contact=contact,
			subdomain=subdomain,
			inventory_partner_domain=inventory_partner_domain,
			owner_domain=owner_domain,
			manager_domain=tuple(managers),
			systems=tuple(systems),
			ext=tuple(ext),
		)


def ads_txt_builder() -> DocumentBuilder:
	return DocumentBuilder(DocumentVariant.ADS_TXT)


def app_ads_txt_builder() -> DocumentBuilder:
	return DocumentBuilder(DocumentVariant.APP_ADS_TXT)


def convert_variant(document: Document, variant: DocumentVariant) -> Document:
	"""Re-target ``document`` at ``variant``.

	app-ads.txt to ads.txt always succeeds. ads.txt to app-ads.txt raises
	``BuildError`` with ``forbidden_field`` when OWNERDOMAIN or MANAGERDOMAIN
	is set; they are never dropped silently.
	"""
	if document.variant is variant:
		return document
	return DocumentBuilder.from_document(document).as_variant(variant).build()
