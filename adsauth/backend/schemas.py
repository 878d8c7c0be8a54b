from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


VariantName = Literal["ads.txt", "app-ads.txt"]
PolicyName = Literal["fail_fast", "collect_all"]


class ApiError(BaseModel):
	model_config = ConfigDict(extra="forbid")

	code: str
	message: str
	evidence: List[str] = Field(default_factory=list)
	diagnostics: List[Dict[str, Any]] = Field(default_factory=list)


class ApiEnvelope(BaseModel):
	model_config = ConfigDict(extra="allow")

	ok: bool
	generated_at: str
	request_id: Optional[str] = None
	data: Optional[Dict[str, Any]] = None
	error: Optional[ApiError] = None


class ParseDocumentRequest(BaseModel):
	model_config = ConfigDict(extra="forbid")

	content: str = Field(..., description="Full text of the ads.txt or app-ads.txt file.")
	variant: VariantName = Field(default="ads.txt")
	policy: Optional[PolicyName] = Field(
		default=None,
		description="fail_fast | collect_all; defaults to ADSAUTH_DEFAULT_POLICY.",
	)


class CanonicalizeRequest(BaseModel):
	model_config = ConfigDict(extra="forbid")

	content: str = Field(..., description="Full text of the ads.txt or app-ads.txt file.")
	variant: VariantName = Field(default="ads.txt")


class AuthorizedSystemPayload(BaseModel):
	model_config = ConfigDict(extra="forbid")

	domain: str
	publisher_account_id: str
	account_type: str = Field(..., description="DIRECT | RESELLER (case-insensitive)")
	certification_authority_id: Optional[str] = None


class ManagerDomainPayload(BaseModel):
	model_config = ConfigDict(extra="forbid")

	domain: str
	country_code: Optional[str] = None


class ExtensionPayload(BaseModel):
	model_config = ConfigDict(extra="forbid")

	key: str
	value: str = ""


class DocumentPayload(BaseModel):
	model_config = ConfigDict(extra="ignore")

	variant: VariantName = "ads.txt"
	contact: List[str] = Field(default_factory=list)
	subdomain: Optional[str] = None
	inventory_partner_domain: Optional[str] = None
	owner_domain: Optional[str] = None
	manager_domain: List[ManagerDomainPayload] = Field(default_factory=list)
	systems: List[AuthorizedSystemPayload] = Field(default_factory=list)
	ext: List[ExtensionPayload] = Field(default_factory=list)


class SerializeDocumentRequest(BaseModel):
	model_config = ConfigDict(extra="forbid")

	document: DocumentPayload
