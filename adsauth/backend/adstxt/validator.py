# adsauth/backend/adstxt/validator.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Sequence

from . import lines
from .builder import DocumentBuilder
from .errors import AdsTxtError, ParseErrors, UnsupportedDirective
from .lines import ClassifiedLine, RecordLine, UnknownVariableLine, VariableLine, classify_lines
from .records import parse_record
from .types import Document, DocumentVariant, FailurePolicy
from .variables import VariableInterpreter


logger = logging.getLogger(__name__)

_FORBIDDEN_DIRECTIVES: Dict[DocumentVariant, FrozenSet[str]] = {
	DocumentVariant.ADS_TXT: frozenset(),
	DocumentVariant.APP_ADS_TXT: frozenset({lines.OWNERDOMAIN, lines.MANAGERDOMAIN}),
}


class ValidatorState(str, Enum):
	EMPTY = "empty"
	ACCUMULATING = "accumulating"
	SEALED = "sealed"
	REJECTED = "rejected"


def check_directive_allowed(variable: VariableLine, variant: DocumentVariant) -> None:
	if variable.key in _FORBIDDEN_DIRECTIVES[variant]:
		raise UnsupportedDirective(
			line=variable.line_number,
			directive=variable.key,
			variant=variant,
			raw=variable.raw,
		)


class DocumentValidator:
	"""Folds classified lines into a Document for one variant.

	Under FAIL_FAST the first error is raised as is. Under COLLECT_ALL
	structural errors are recorded and parsing continues; any fatal error,
	or the end of input with recorded errors, raises ``ParseErrors``.
	"""

	def __init__(self, variant: DocumentVariant, policy: FailurePolicy = FailurePolicy.FAIL_FAST):
		self.variant = variant
		self.policy = policy
		self.state = ValidatorState.EMPTY
		self.errors: List[AdsTxtError] = []
		self._builder = DocumentBuilder(variant)
		self._variables = VariableInterpreter(self._builder)

	def screen(self, nodes: Sequence[ClassifiedLine]) -> None:
		"""Reject directives the variant forbids before any line is folded.

		A forbidden directive means the wrong variant was chosen, so it is
		reported ahead of any error on an earlier line.
		"""
		for node in nodes:
			if not isinstance(node, VariableLine):
				continue
			try:
				check_directive_allowed(node, self.variant)
			except UnsupportedDirective as exc:
				self.errors.append(exc)
				self.state = ValidatorState.REJECTED
				logger.debug("Rejected %s: %s on line %d", self.variant.value, node.key, node.line_number)
				if self.policy is FailurePolicy.COLLECT_ALL:
					raise ParseErrors(self.errors) from exc
				raise

	def feed(self, node: ClassifiedLine) -> None:
		if self.state in (ValidatorState.SEALED, ValidatorState.REJECTED):
			raise RuntimeError(f"Validator is {self.state.value}; no more lines accepted.")
		self.state = ValidatorState.ACCUMULATING
		try:
			self._apply(node)
		except AdsTxtError as exc:
			self._reject_or_record(exc)

	def _apply(self, node: ClassifiedLine) -> None:
		if isinstance(node, VariableLine):
			check_directive_allowed(node, self.variant)
			self._variables.apply(node)
		elif isinstance(node, UnknownVariableLine):
			self._variables.apply_unknown(node)
		elif isinstance(node, RecordLine):
			system = parse_record(node)
			self._builder.add_system(
				system.domain,
				system.publisher_account_id,
				system.account_type,
				system.certification_authority_id,
			)
		else:
			raise TypeError(f"Unexpected line node: {node!r}")

	def _reject_or_record(self, exc: AdsTxtError) -> None:
		if self.policy is FailurePolicy.COLLECT_ALL:
			self.errors.append(exc)
			if exc.recoverable:
				return
			self.state = ValidatorState.REJECTED
			raise ParseErrors(self.errors) from exc
		self.errors.append(exc)
		self.state = ValidatorState.REJECTED
		raise exc

	def finish(self) -> Document:
		if self.state is ValidatorState.REJECTED:
			raise ParseErrors(self.errors)
		if self.errors:
			self.state = ValidatorState.REJECTED
			logger.debug("Rejected %s with %d error(s)", self.variant.value, len(self.errors))
			raise ParseErrors(self.errors)
		document = self._builder.build()
		self.state = ValidatorState.SEALED
		logger.debug(
			"Sealed %s: %d system(s), %d variable(s) preserved as ext",
			self.variant.value,
			len(document.systems),
			len(document.ext),
		)
		return document


def validate_lines(
	nodes: Iterable[ClassifiedLine],
	variant: DocumentVariant,
	policy: FailurePolicy = FailurePolicy.FAIL_FAST,
) -> Document:
	nodes = list(nodes)
	validator = DocumentValidator(variant, policy)
	validator.screen(nodes)
	for node in nodes:
		validator.feed(node)
	return validator.finish()


def parse_document(
	text: str,
	variant: DocumentVariant,
	policy: FailurePolicy = FailurePolicy.FAIL_FAST,
) -> Document:
	return validate_lines(classify_lines(text), variant, policy)


def parse_ads_txt(text: str, policy: FailurePolicy = FailurePolicy.FAIL_FAST) -> Document:
	return parse_document(text, DocumentVariant.ADS_TXT, policy)


def parse_app_ads_txt(text: str, policy: FailurePolicy = FailurePolicy.FAIL_FAST) -> Document:
	return parse_document(text, DocumentVariant.APP_ADS_TXT, policy)
