from adsauth.backend.adstxt.builder import (
	DocumentBuilder,
	ads_txt_builder,
	app_ads_txt_builder,
	convert_variant,
)
from adsauth.backend.adstxt.errors import (
	AdsTxtError,
	BuildError,
	BuildViolation,
	BuildViolationKind,
	DuplicateInventoryPartnerDomain,
	DuplicateOwnerDomain,
	DuplicateSubdomain,
	EmptyAccountId,
	EmptyDirectiveValue,
	EmptyDomain,
	InvalidCertificationId,
	InvalidCountryCode,
	MalformedManagerDomain,
	MalformedRecord,
	ParseErrors,
	UnknownRelationType,
	UnsupportedDirective,
)
from adsauth.backend.adstxt.serializer import canonicalize, serialize_document
from adsauth.backend.adstxt.types import (
	AuthorizedSystem,
	Document,
	DocumentVariant,
	ExtensionVariable,
	FailurePolicy,
	ManagerDomainEntry,
	SellerRelationType,
)
from adsauth.backend.adstxt.validator import (
	DocumentValidator,
	ValidatorState,
	parse_ads_txt,
	parse_app_ads_txt,
	parse_document,
)

__all__ = [
	"AdsTxtError",
	"AuthorizedSystem",
	"BuildError",
	"BuildViolation",
	"BuildViolationKind",
	"Document",
	"DocumentBuilder",
	"DocumentValidator",
	"DocumentVariant",
	"DuplicateInventoryPartnerDomain",
	"DuplicateOwnerDomain",
	"DuplicateSubdomain",
	"EmptyAccountId",
	"EmptyDirectiveValue",
	"EmptyDomain",
	"ExtensionVariable",
	"FailurePolicy",
	"InvalidCertificationId",
	"InvalidCountryCode",
	"MalformedManagerDomain",
	"MalformedRecord",
	"ManagerDomainEntry",
	"ParseErrors",
	"SellerRelationType",
	"UnknownRelationType",
	"UnsupportedDirective",
	"ValidatorState",
	"ads_txt_builder",
	"app_ads_txt_builder",
	"canonicalize",
	"convert_variant",
	"parse_ads_txt",
	"parse_app_ads_txt",
	"parse_document",
	"serialize_document",
]
