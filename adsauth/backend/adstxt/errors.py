# adsauth/backend/adstxt/errors.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

if TYPE_CHECKING:
	from .types import DocumentVariant


LineRef = Union[int, str]
BUILDER_LINE = "builder"

STRUCTURAL = "structural"
VARIANT = "variant"
SEMANTIC = "semantic"
BUILD = "build"

_RAW_PREVIEW = 100


def _preview(text: str) -> str:
	return text if len(text) <= _RAW_PREVIEW else text[:_RAW_PREVIEW] + "..."


class AdsTxtError(Exception):
	"""Base class for every diagnostic raised by the ads.txt core."""

	kind = "error"
	category = STRUCTURAL

	def __init__(self, message: str, *, line: LineRef, raw: str = ""):
		super().__init__(message)
		self.message = message
		self.line = line
		self.raw = raw

	@property
	def recoverable(self) -> bool:
		return self.category == STRUCTURAL

	def context(self) -> Dict[str, Any]:
		return {}

	def render(self) -> str:
		where = f"line {self.line}" if isinstance(self.line, int) else str(self.line)
		text = f"{where}: {self.message}"
		if self.raw:
			text = f"{text} [{_preview(self.raw)}]"
		return text

	def as_dict(self) -> Dict[str, Any]:
		payload: Dict[str, Any] = {
			"kind": self.kind,
			"category": self.category,
			"line": self.line,
			"message": self.message,
			"raw": _preview(self.raw),
		}
		payload.update(self.context())
		return payload


class MalformedRecord(AdsTxtError):
	kind = "malformed_record"

	def __init__(self, *, line: int, field_count: int, raw: str = ""):
		super().__init__(
			f"Expected 3 or 4 comma-separated fields, found {field_count}.",
			line=line,
			raw=raw,
		)
		self.field_count = field_count

	def context(self) -> Dict[str, Any]:
		return {"field_count": self.field_count}


class EmptyDomain(AdsTxtError):
	kind = "empty_domain"

	def __init__(self, *, line: int, raw: str = ""):
		super().__init__("Advertising system domain is empty.", line=line, raw=raw)


class EmptyAccountId(AdsTxtError):
	kind = "empty_account_id"

	def __init__(self, *, line: int, raw: str = ""):
		super().__init__("Publisher account id is empty.", line=line, raw=raw)


class UnknownRelationType(AdsTxtError):
	kind = "unknown_relation_type"

	def __init__(self, *, line: int, value: str, raw: str = ""):
		super().__init__(
			f"Expected DIRECT or RESELLER, found {value!r}.",
			line=line,
			raw=raw,
		)
		self.value = value

	def context(self) -> Dict[str, Any]:
		return {"value": self.value, "expected": ["DIRECT", "RESELLER"]}


class InvalidCertificationId(AdsTxtError):
	kind = "invalid_certification_id"

	def __init__(self, *, line: int, value: str, raw: str = ""):
		super().__init__(
			f"Certification authority id must be a single token, found {value!r}.",
			line=line,
			raw=raw,
		)
		self.value = value

	def context(self) -> Dict[str, Any]:
		return {"value": self.value}


class EmptyDirectiveValue(AdsTxtError):
	kind = "empty_directive_value"

	def __init__(self, *, line: int, directive: str, raw: str = ""):
		super().__init__(f"{directive} has an empty value.", line=line, raw=raw)
		self.directive = directive

	def context(self) -> Dict[str, Any]:
		return {"directive": self.directive}


class UnsupportedDirective(AdsTxtError):
	kind = "unsupported_directive"
	category = VARIANT

	def __init__(self, *, line: int, directive: str, variant: DocumentVariant, raw: str = ""):
		super().__init__(
			f"{directive} is not allowed in {variant.value} {variant.spec_version}.",
			line=line,
			raw=raw,
		)
		self.directive = directive
		self.variant = variant

	def context(self) -> Dict[str, Any]:
		return {"directive": self.directive, "variant": self.variant.value}


class DuplicateDirective(AdsTxtError):
	category = SEMANTIC
	directive = ""

	def __init__(self, *, line: int, first_line: Optional[int] = None, raw: str = ""):
		message = f"{self.directive} may appear only once."
		if first_line is not None:
			message = f"{self.directive} may appear only once (first set on line {first_line})."
		super().__init__(message, line=line, raw=raw)
		self.first_line = first_line

	def context(self) -> Dict[str, Any]:
		return {"directive": self.directive, "first_line": self.first_line}


class DuplicateSubdomain(DuplicateDirective):
	kind = "duplicate_subdomain"
	directive = "SUBDOMAIN"


class DuplicateOwnerDomain(DuplicateDirective):
	kind = "duplicate_owner_domain"
	directive = "OWNERDOMAIN"


class DuplicateInventoryPartnerDomain(DuplicateDirective):
	kind = "duplicate_inventory_partner_domain"
	directive = "INVENTORYPARTNERDOMAIN"


class InvalidCountryCode(AdsTxtError):
	kind = "invalid_country_code"
	category = SEMANTIC

	def __init__(self, *, line: int, value: str, raw: str = ""):
		super().__init__(
			f"Country code must be two letters (ISO 3166-1 alpha-2), found {value!r}.",
			line=line,
			raw=raw,
		)
		self.value = value

	def context(self) -> Dict[str, Any]:
		return {"value": self.value}


class MalformedManagerDomain(AdsTxtError):
	kind = "malformed_manager_domain"
	category = SEMANTIC

	def __init__(self, *, line: int, value: str, raw: str = ""):
		super().__init__(
			f"Expected 'domain[, country_code]', found {value!r}.",
			line=line,
			raw=raw,
		)
		self.value = value

	def context(self) -> Dict[str, Any]:
		return {"value": self.value}


class ParseErrors(AdsTxtError):
	"""Every diagnostic gathered by a collect-all parse, in source order."""

	kind = "parse_errors"

	def __init__(self, errors: Sequence[AdsTxtError]):
		self.errors: List[AdsTxtError] = list(errors)
		first_line = self.errors[0].line if self.errors else 0
		super().__init__(f"{len(self.errors)} error(s) in document.", line=first_line)

	def render(self) -> str:
		return "\n".join(error.render() for error in self.errors)

	def as_dict(self) -> Dict[str, Any]:
		return {
			"kind": self.kind,
			"message": self.message,
			"errors": [error.as_dict() for error in self.errors],
		}


class BuildViolationKind(str, Enum):
	EMPTY_DOMAIN = "empty_domain"
	EMPTY_ACCOUNT_ID = "empty_account_id"
	INVALID_ACCOUNT_TYPE = "invalid_account_type"
	FORBIDDEN_FIELD = "forbidden_field"
	MULTIPLE_SUBDOMAINS = "multiple_subdomains"
	INVALID_COUNTRY_CODE = "invalid_country_code"
	INVALID_CERTIFICATION_ID = "invalid_certification_id"
	EMPTY_VALUE = "empty_value"
	UNSERIALIZABLE_VALUE = "unserializable_value"
	RESERVED_EXT_KEY = "reserved_ext_key"


@dataclass(frozen=True)
class BuildViolation:
	kind: BuildViolationKind
	field: str
	message: str

	def as_dict(self) -> Dict[str, str]:
		return {"kind": self.kind.value, "field": self.field, "message": self.message}


class BuildError(AdsTxtError):
	kind = "build_error"
	category = BUILD

	def __init__(self, violations: Sequence[BuildViolation]):
		self.violations: List[BuildViolation] = list(violations)
		summary = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
		super().__init__(f"Document is invalid: {summary}", line=BUILDER_LINE)

	@property
	def kinds(self) -> List[BuildViolationKind]:
		return [violation.kind for violation in self.violations]

	def context(self) -> Dict[str, Any]:
		return {"violations": [violation.as_dict() for violation in self.violations]}
