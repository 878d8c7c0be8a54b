# adsauth/backend/adstxt/variables.py
from __future__ import annotations

import logging
from typing import Dict, Type

from . import lines
from .builder import DocumentBuilder
from .errors import (
	DuplicateDirective,
	DuplicateInventoryPartnerDomain,
	DuplicateOwnerDomain,
	DuplicateSubdomain,
	EmptyDirectiveValue,
	InvalidCountryCode,
	MalformedManagerDomain,
)
from .lines import UnknownVariableLine, VariableLine
from .types import ManagerDomainEntry, normalize_country_code


logger = logging.getLogger(__name__)


def parse_manager_domain(variable: VariableLine) -> ManagerDomainEntry:
	parts = [part.strip() for part in variable.value.split(",")]
	if len(parts) > 2 or not parts[0]:
		raise MalformedManagerDomain(line=variable.line_number, value=variable.value, raw=variable.raw)
	if len(parts) == 1 or not parts[1]:
		return ManagerDomainEntry(domain=parts[0])
	country_code = normalize_country_code(parts[1])
	if country_code is None:
		raise InvalidCountryCode(line=variable.line_number, value=parts[1], raw=variable.raw)
	return ManagerDomainEntry(domain=parts[0], country_code=country_code)


class VariableInterpreter:
	"""Applies recognized directives to a builder, tracking singleton fields."""

	def __init__(self, builder: DocumentBuilder):
		self.builder = builder
		self._first_seen: Dict[str, int] = {}

	def _claim_singleton(self, variable: VariableLine, duplicate_error: Type[DuplicateDirective]) -> None:
		first_line = self._first_seen.get(variable.key)
		if first_line is not None:
			raise duplicate_error(line=variable.line_number, first_line=first_line, raw=variable.raw)
		self._first_seen[variable.key] = variable.line_number

	def apply(self, variable: VariableLine) -> None:
		if not variable.value:
			raise EmptyDirectiveValue(line=variable.line_number, directive=variable.key, raw=variable.raw)
		key = variable.key
		if key == lines.CONTACT:
			self.builder.add_contact(variable.value)
		elif key == lines.SUBDOMAIN:
			self._claim_singleton(variable, DuplicateSubdomain)
			self.builder.subdomain(variable.value.lower())
		elif key == lines.INVENTORYPARTNERDOMAIN:
			self._claim_singleton(variable, DuplicateInventoryPartnerDomain)
			self.builder.inventory_partner_domain(variable.value.lower())
		elif key == lines.OWNERDOMAIN:
			self._claim_singleton(variable, DuplicateOwnerDomain)
			self.builder.owner_domain(variable.value)
		elif key == lines.MANAGERDOMAIN:
			entry = parse_manager_domain(variable)
			self.builder.add_manager_domain(entry.domain, entry.country_code)
		else:
			raise ValueError(f"Not a recognized directive: {key}")

	def apply_unknown(self, variable: UnknownVariableLine) -> None:
		logger.debug(
			"Preserving unrecognized directive %s on line %d",
			variable.key,
			variable.line_number,
		)
		self.builder.add_ext(variable.key, variable.value)
