from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Request

from adsauth.backend.adstxt import AdsTxtError, ParseErrors


def now_iso() -> str:
	return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _request_id(request: Optional[Request]) -> Optional[str]:
	if request is None:
		return None
	return getattr(request.state, "request_id", None)


def success_response(
	*,
	request: Optional[Request] = None,
	data: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
	payload: Dict[str, Any] = {
		"ok": True,
		"generated_at": now_iso(),
	}
	request_id = _request_id(request)
	if request_id:
		payload["request_id"] = request_id
	if data is not None:
		payload["data"] = data
	return payload


def error_response(
	*,
	code: str,
	message: str,
	request: Optional[Request] = None,
	evidence: Optional[List[str]] = None,
	diagnostics: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
	payload: Dict[str, Any] = {
		"ok": False,
		"generated_at": now_iso(),
		"error": {
			"code": code,
			"message": message,
			"evidence": evidence or [],
			"diagnostics": diagnostics or [],
		},
	}
	request_id = _request_id(request)
	if request_id:
		payload["request_id"] = request_id
	return payload


def diagnostics_of(exc: AdsTxtError) -> List[AdsTxtError]:
	if isinstance(exc, ParseErrors):
		return list(exc.errors)
	return [exc]


def document_error_response(exc: AdsTxtError, *, request: Optional[Request] = None) -> Dict[str, Any]:
	errors = diagnostics_of(exc)
	return error_response(
		code=exc.kind,
		message=exc.message,
		request=request,
		evidence=[error.render() for error in errors],
		diagnostics=[error.as_dict() for error in errors],
	)
