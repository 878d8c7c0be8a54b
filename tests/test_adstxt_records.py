from unittest import TestCase

from adsauth.backend.adstxt.errors import (
	EmptyAccountId,
	EmptyDomain,
	InvalidCertificationId,
	MalformedRecord,
	UnknownRelationType,
)
from adsauth.backend.adstxt.lines import RecordLine
from adsauth.backend.adstxt.records import parse_record
from adsauth.backend.adstxt.types import AuthorizedSystem, SellerRelationType


def _record(text: str, line_number: int = 1) -> RecordLine:
	return RecordLine(line_number=line_number, text=text, raw=text)


class SellerRelationTypeTests(TestCase):
	def test_tokens_match_case_insensitively(self) -> None:
		for token in ("direct", "DIRECT", "Direct", " direct "):
			self.assertIs(SellerRelationType.from_token(token), SellerRelationType.DIRECT)
		for token in ("reseller", "RESELLER", "ReSeLLeR"):
			self.assertIs(SellerRelationType.from_token(token), SellerRelationType.RESELLER)

	def test_unknown_tokens_have_no_fallback(self) -> None:
		for token in ("directe", "reseler", "", "BOTH", "INDIRECT"):
			with self.assertRaises(ValueError):
				SellerRelationType.from_token(token)


class RecordParserTests(TestCase):
	def test_direct_record_with_certification_id(self) -> None:
		system = parse_record(_record("google.com, pub-1234567890123456, DIRECT, f08c47fec0942fa0"))
		self.assertEqual(
			system,
			AuthorizedSystem(
				domain="google.com",
				publisher_account_id="pub-1234567890123456",
				account_type=SellerRelationType.DIRECT,
				certification_authority_id="f08c47fec0942fa0",
			),
		)

	def test_lower_case_reseller_without_certification_id(self) -> None:
		system = parse_record(_record("silverssp.com, 9876, reseller"))
		self.assertIs(system.account_type, SellerRelationType.RESELLER)
		self.assertIsNone(system.certification_authority_id)

	def test_trailing_empty_certification_id_becomes_none(self) -> None:
		system = parse_record(_record("redssp.com, 4455, RESELLER, "))
		self.assertIsNone(system.certification_authority_id)

	def test_domain_is_stored_as_given(self) -> None:
		system = parse_record(_record("GreenAdExchange.com, XF7342, DIRECT"))
		self.assertEqual(system.domain, "GreenAdExchange.com")
		self.assertEqual(system.domain_key, "greenadexchange.com")
		self.assertEqual(system.publisher_account_id, "XF7342")

	def test_five_fields_fail_with_field_count(self) -> None:
		with self.assertRaises(MalformedRecord) as ctx:
			parse_record(_record("example.com, id1, DIRECT, id2, id3", 9))
		self.assertEqual(ctx.exception.field_count, 5)
		self.assertEqual(ctx.exception.line, 9)

	def test_empty_domain(self) -> None:
		with self.assertRaises(EmptyDomain) as ctx:
			parse_record(_record(" , 1234, DIRECT", 3))
		self.assertEqual(ctx.exception.line, 3)

	def test_empty_account_id(self) -> None:
		with self.assertRaises(EmptyAccountId):
			parse_record(_record("a.com, , DIRECT"))

	def test_unknown_relationship_reports_value(self) -> None:
		with self.assertRaises(UnknownRelationType) as ctx:
			parse_record(_record("a.com, 1, PARTNER", 5))
		self.assertEqual(ctx.exception.value, "PARTNER")
		self.assertEqual(ctx.exception.as_dict()["expected"], ["DIRECT", "RESELLER"])

	def test_certification_id_with_whitespace_is_rejected(self) -> None:
		with self.assertRaises(InvalidCertificationId):
			parse_record(_record("a.com, 1, DIRECT, abc def"))
