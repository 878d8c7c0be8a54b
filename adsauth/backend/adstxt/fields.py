# adsauth/backend/adstxt/fields.py
from __future__ import annotations

from typing import List

from .errors import MalformedRecord
from .lines import RecordLine


MIN_FIELDS = 3
MAX_FIELDS = 4
FIELD_SEPARATOR = ","


def split_fields(text: str) -> List[str]:
	return [part.strip() for part in text.split(FIELD_SEPARATOR)]


def tokenize_record(record: RecordLine) -> List[str]:
	fields = split_fields(record.text)
	if not MIN_FIELDS <= len(fields) <= MAX_FIELDS:
		raise MalformedRecord(
			line=record.line_number,
			field_count=len(fields),
			raw=record.raw,
		)
	return fields
