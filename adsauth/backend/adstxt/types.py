# adsauth/backend/adstxt/types.py
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .errors import BuildError, BuildViolation, BuildViolationKind


_COUNTRY_CODE_RE = re.compile(r"^[A-Za-z]{2}$")


def normalize_country_code(value: str) -> Optional[str]:
	"""Return the upper-cased code, or None when ``value`` is not two letters."""
	value = value.strip()
	if not _COUNTRY_CODE_RE.match(value):
		return None
	return value.upper()


class DocumentVariant(str, Enum):
	ADS_TXT = "ads.txt"
	APP_ADS_TXT = "app-ads.txt"

	@property
	def spec_version(self) -> str:
		return "1.1" if self is DocumentVariant.ADS_TXT else "1.0"

	@classmethod
	def from_name(cls, name: str) -> "DocumentVariant":
		token = name.strip().lower().replace("_", "-")
		for variant in cls:
			aliases = {
				variant.value,
				variant.value.replace(".txt", ""),
				variant.value.replace(".", "-"),
			}
			if token in aliases:
				return variant
		raise ValueError(f"Unknown document variant: {name!r}")


class FailurePolicy(str, Enum):
	FAIL_FAST = "fail_fast"
	COLLECT_ALL = "collect_all"


class SellerRelationType(str, Enum):
	"""Type of account between the publisher and the advertising system.

	DIRECT means the publisher controls the account on the advertising system.
	RESELLER means the publisher authorized another entity to control the
	account and resell the inventory through that system.
	"""

	DIRECT = "DIRECT"
	RESELLER = "RESELLER"

	@classmethod
	def from_token(cls, token: str) -> "SellerRelationType":
		normalized = token.strip().upper()
		for member in cls:
			if member.value == normalized:
				return member
		raise ValueError(f"Unknown relationship type: {token!r}")


@dataclass(frozen=True)
class ManagerDomainEntry:
	domain: str
	country_code: Optional[str] = None

	def as_dict(self) -> Dict[str, Optional[str]]:
		return {"domain": self.domain, "country_code": self.country_code}


@dataclass(frozen=True)
class AuthorizedSystem:
	domain: str
	publisher_account_id: str
	account_type: SellerRelationType
	certification_authority_id: Optional[str] = None

	def __post_init__(self) -> None:
		violations: List[BuildViolation] = []
		if not isinstance(self.domain, str) or not self.domain.strip():
			violations.append(
				BuildViolation(BuildViolationKind.EMPTY_DOMAIN, "domain", "Domain is empty.")
			)
		if not isinstance(self.publisher_account_id, str) or not self.publisher_account_id.strip():
			violations.append(
				BuildViolation(
					BuildViolationKind.EMPTY_ACCOUNT_ID,
					"publisher_account_id",
					"Publisher account id is empty.",
				)
			)
		if not isinstance(self.account_type, SellerRelationType):
			violations.append(
				BuildViolation(
					BuildViolationKind.INVALID_ACCOUNT_TYPE,
					"account_type",
					f"Expected DIRECT or RESELLER, got {self.account_type!r}.",
				)
			)
		if violations:
			raise BuildError(violations)

	@property
	def domain_key(self) -> str:
		return self.domain.lower()

	def as_dict(self) -> Dict[str, Optional[str]]:
		return {
			"domain": self.domain,
			"publisher_account_id": self.publisher_account_id,
			"account_type": self.account_type.value,
			"certification_authority_id": self.certification_authority_id,
		}


@dataclass(frozen=True)
class ExtensionVariable:
	key: str
	value: str

	def as_dict(self) -> Dict[str, str]:
		return {"key": self.key, "value": self.value}


@dataclass(frozen=True)
class Document:
	"""A validated ads.txt or app-ads.txt document.

	Instances come out of the parser or out of ``DocumentBuilder.build()``.
	Direct construction is checked too: an app-ads.txt document carrying
	OWNERDOMAIN or MANAGERDOMAIN raises ``BuildError``, as does any
	``AuthorizedSystem`` with an empty domain or account id.
	"""

	variant: DocumentVariant
	contact: Tuple[str, ...] = ()
	subdomain: Optional[str] = None
	inventory_partner_domain: Optional[str] = None
	owner_domain: Optional[str] = None
	manager_domain: Tuple[ManagerDomainEntry, ...] = ()
	systems: Tuple[AuthorizedSystem, ...] = ()
	ext: Tuple[ExtensionVariable, ...] = ()

	def __post_init__(self) -> None:
		if self.variant is not DocumentVariant.APP_ADS_TXT:
			return
		violations: List[BuildViolation] = []
		if self.owner_domain is not None:
			violations.append(
				BuildViolation(
					BuildViolationKind.FORBIDDEN_FIELD,
					"owner_domain",
					f"OWNERDOMAIN is not allowed in {self.variant.value}.",
				)
			)
		if self.manager_domain:
			violations.append(
				BuildViolation(
					BuildViolationKind.FORBIDDEN_FIELD,
					"manager_domain",
					f"MANAGERDOMAIN is not allowed in {self.variant.value}.",
				)
			)
		if violations:
			raise BuildError(violations)

	@property
	def is_empty(self) -> bool:
		return not (
			self.contact
			or self.subdomain
			or self.inventory_partner_domain
			or self.owner_domain
			or self.manager_domain
			or self.systems
			or self.ext
		)

	def as_dict(self) -> Dict[str, Any]:
		return {
			"variant": self.variant.value,
			"spec_version": self.variant.spec_version,
			"contact": list(self.contact),
			"subdomain": self.subdomain,
			"inventory_partner_domain": self.inventory_partner_domain,
			"owner_domain": self.owner_domain,
			"manager_domain": [entry.as_dict() for entry in self.manager_domain],
			"systems": [system.as_dict() for system in self.systems],
			"ext": [item.as_dict() for item in self.ext],
		}
