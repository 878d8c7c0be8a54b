# adsauth/backend/adstxt/lines.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Union


CONTACT = "CONTACT"
SUBDOMAIN = "SUBDOMAIN"
INVENTORYPARTNERDOMAIN = "INVENTORYPARTNERDOMAIN"
OWNERDOMAIN = "OWNERDOMAIN"
MANAGERDOMAIN = "MANAGERDOMAIN"

KNOWN_DIRECTIVES = (
	CONTACT,
	SUBDOMAIN,
	INVENTORYPARTNERDOMAIN,
	OWNERDOMAIN,
	MANAGERDOMAIN,
)

COMMENT_CHAR = "#"
_BOM = "\ufeff"
_VARIABLE_RE = re.compile(r"^([A-Za-z][A-Za-z0-9_\-]*)\s*=(.*)$")


@dataclass(frozen=True)
class VariableLine:
	line_number: int
	key: str
	value: str
	raw: str


@dataclass(frozen=True)
class UnknownVariableLine:
	line_number: int
	key: str
	value: str
	raw: str


@dataclass(frozen=True)
class RecordLine:
	line_number: int
	text: str
	raw: str


ClassifiedLine = Union[VariableLine, UnknownVariableLine, RecordLine]


def strip_comment(line: str) -> str:
	# ads.txt has no quoting, a '#' always starts a comment
	index = line.find(COMMENT_CHAR)
	return line if index < 0 else line[:index]


def is_variable_text(text: str) -> bool:
	return _VARIABLE_RE.match(text.strip()) is not None


def classify_line(raw: str, line_number: int) -> ClassifiedLine | None:
	text = strip_comment(raw.rstrip("\r")).strip()
	if not text:
		return None
	match = _VARIABLE_RE.match(text)
	if match is None:
		return RecordLine(line_number=line_number, text=text, raw=raw)
	key = match.group(1)
	value = match.group(2).strip()
	if key.upper() in KNOWN_DIRECTIVES:
		return VariableLine(line_number=line_number, key=key.upper(), value=value, raw=raw)
	return UnknownVariableLine(line_number=line_number, key=key, value=value, raw=raw)


def classify_lines(text: str) -> Iterator[ClassifiedLine]:
	if text.startswith(_BOM):
		text = text[len(_BOM):]
	for idx, raw in enumerate(text.split("\n"), start=1):
		node = classify_line(raw, idx)
		if node is not None:
			yield node
