# adsauth/backend/adstxt/records.py
from __future__ import annotations

import re
from typing import List, Optional

from .errors import EmptyAccountId, EmptyDomain, InvalidCertificationId, UnknownRelationType
from .fields import tokenize_record
from .lines import RecordLine
from .types import AuthorizedSystem, SellerRelationType


_WHITESPACE_RE = re.compile(r"\s")


def is_valid_certification_id(value: str) -> bool:
	return bool(value) and "," not in value and _WHITESPACE_RE.search(value) is None


def _certification_id(fields: List[str], record: RecordLine) -> Optional[str]:
	if len(fields) < 4 or not fields[3]:
		return None
	value = fields[3]
	if not is_valid_certification_id(value):
		raise InvalidCertificationId(line=record.line_number, value=value, raw=record.raw)
	return value


def parse_record(record: RecordLine) -> AuthorizedSystem:
	fields = tokenize_record(record)
	domain, account_id, relation = fields[0], fields[1], fields[2]
	if not domain:
		raise EmptyDomain(line=record.line_number, raw=record.raw)
	if not account_id:
		raise EmptyAccountId(line=record.line_number, raw=record.raw)
	try:
		account_type = SellerRelationType.from_token(relation)
	except ValueError as exc:
		raise UnknownRelationType(line=record.line_number, value=relation, raw=record.raw) from exc
	return AuthorizedSystem(
		domain=domain,
		publisher_account_id=account_id,
		account_type=account_type,
		certification_authority_id=_certification_id(fields, record),
	)
