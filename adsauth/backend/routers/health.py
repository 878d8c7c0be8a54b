from __future__ import annotations

from fastapi import APIRouter, Request

from adsauth.backend import config, constants
from adsauth.backend.adstxt import DocumentVariant
from adsauth.backend.response import success_response
from adsauth.backend.schemas import ApiEnvelope


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=ApiEnvelope)
def get_health(request: Request):
	return success_response(
		request=request,
		data={
			"app": constants.APP_NAME,
			"version": constants.APP_VERSION,
			"variants": {variant.value: variant.spec_version for variant in DocumentVariant},
			"settings": config.settings_summary(),
		},
	)
