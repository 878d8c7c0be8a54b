from __future__ import annotations

import logging
import os

from adsauth.backend import constants
from adsauth.backend.adstxt import FailurePolicy


def _int_env(name: str, default: int, minimum: int = 1) -> int:
	raw = os.getenv(name, "").strip()
	if not raw:
		return default
	try:
		value = int(raw)
	except ValueError:
		return default
	return value if value >= minimum else default


def default_policy() -> FailurePolicy:
	raw = os.getenv("ADSAUTH_DEFAULT_POLICY", constants.DEFAULT_POLICY).strip().lower()
	try:
		return FailurePolicy(raw)
	except ValueError:
		return FailurePolicy(constants.DEFAULT_POLICY)


def max_document_bytes() -> int:
	return _int_env(
		"ADSAUTH_MAX_DOCUMENT_BYTES",
		constants.DEFAULT_MAX_DOCUMENT_BYTES,
		minimum=constants.MIN_MAX_DOCUMENT_BYTES,
	)


def log_level() -> int:
	name = os.getenv("ADSAUTH_LOG_LEVEL", constants.DEFAULT_LOG_LEVEL).strip().upper()
	level = logging.getLevelName(name)
	return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
	root = logging.getLogger("adsauth")
	root.setLevel(log_level())
	if not root.handlers:
		handler = logging.StreamHandler()
		handler.setFormatter(logging.Formatter(constants.LOG_FORMAT))
		root.addHandler(handler)


def settings_summary() -> dict:
	return {
		"default_policy": default_policy().value,
		"max_document_bytes": max_document_bytes(),
		"log_level": logging.getLevelName(log_level()),
	}
