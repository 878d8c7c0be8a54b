from dataclasses import replace
from unittest import TestCase

from adsauth.backend.adstxt import (
	AuthorizedSystem,
	BuildError,
	BuildViolationKind,
	Document,
	DocumentBuilder,
	DocumentVariant,
	ManagerDomainEntry,
	SellerRelationType,
	ads_txt_builder,
	app_ads_txt_builder,
	convert_variant,
	parse_ads_txt,
	parse_app_ads_txt,
)


class DocumentBuilderTests(TestCase):
	def test_builds_a_complete_ads_txt(self) -> None:
		document = (
			ads_txt_builder()
			.add_contact(" ops@example.com ")
			.subdomain("Sports.Example.com")
			.owner_domain("example.com")
			.add_manager_domain("mgr1.com", "us")
			.add_manager_domain("mgr2.com")
			.add_system("google.com", "pub-1", "direct", "f08c47fec0942fa0")
			.add_system("silverssp.com", "9876", SellerRelationType.RESELLER, "")
			.build()
		)
		self.assertEqual(document.contact, ("ops@example.com",))
		self.assertEqual(document.subdomain, "sports.example.com")
		self.assertEqual(document.manager_domain[0], ManagerDomainEntry("mgr1.com", "US"))
		self.assertIs(document.systems[0].account_type, SellerRelationType.DIRECT)
		self.assertIsNone(document.systems[1].certification_authority_id)

	def test_empty_account_id_fails_build(self) -> None:
		builder = ads_txt_builder().add_system("google.com", "  ", "DIRECT")
		with self.assertRaises(BuildError) as ctx:
			builder.build()
		self.assertEqual(ctx.exception.kinds, [BuildViolationKind.EMPTY_ACCOUNT_ID])
		self.assertEqual(ctx.exception.violations[0].field, "systems[0].publisher_account_id")
		self.assertEqual(ctx.exception.line, "builder")

	def test_every_violation_is_reported_at_once(self) -> None:
		builder = (
			app_ads_txt_builder()
			.owner_domain("example.com")
			.add_manager_domain("mgr.com")
			.subdomain("a.example.com")
			.subdomain("b.example.com")
			.add_system("", "1", "DIRECT")
			.add_system("b.com", "2", "PARTNER")
		)
		with self.assertRaises(BuildError) as ctx:
			builder.build()
		kinds = ctx.exception.kinds
		self.assertEqual(kinds.count(BuildViolationKind.FORBIDDEN_FIELD), 2)
		self.assertIn(BuildViolationKind.MULTIPLE_SUBDOMAINS, kinds)
		self.assertIn(BuildViolationKind.EMPTY_DOMAIN, kinds)
		self.assertIn(BuildViolationKind.INVALID_ACCOUNT_TYPE, kinds)

	def test_setting_the_same_subdomain_twice_is_not_a_conflict(self) -> None:
		document = ads_txt_builder().subdomain("a.example.com").subdomain("A.EXAMPLE.COM").build()
		self.assertEqual(document.subdomain, "a.example.com")

	def test_empty_subdomain_is_an_empty_value_not_a_conflict(self) -> None:
		builder = ads_txt_builder().subdomain("").subdomain("a.example.com")
		with self.assertRaises(BuildError) as ctx:
			builder.build()
		self.assertEqual(ctx.exception.kinds, [BuildViolationKind.EMPTY_VALUE])
		self.assertEqual(ctx.exception.violations[0].field, "subdomain")

	def test_clearing_the_subdomain(self) -> None:
		document = ads_txt_builder().subdomain("a.example.com").subdomain(None).build()
		self.assertIsNone(document.subdomain)

	def test_values_that_cannot_be_rendered_are_rejected(self) -> None:
		builder = (
			ads_txt_builder()
			.add_contact("ops@example.com # ops")
			.add_system("a.com,b.com", "1", "DIRECT")
			.add_system("key=value", "1", "DIRECT")
			.add_system("c.com", "1", "DIRECT", "two tokens")
			.add_manager_domain("mgr.com", "USA")
			.add_ext("CONTACT", "sneaky")
		)
		with self.assertRaises(BuildError) as ctx:
			builder.build()
		kinds = ctx.exception.kinds
		self.assertEqual(kinds.count(BuildViolationKind.UNSERIALIZABLE_VALUE), 3)
		self.assertIn(BuildViolationKind.INVALID_CERTIFICATION_ID, kinds)
		self.assertIn(BuildViolationKind.INVALID_COUNTRY_CODE, kinds)
		self.assertIn(BuildViolationKind.RESERVED_EXT_KEY, kinds)

	def test_from_document_produces_an_equal_copy(self) -> None:
		document = parse_ads_txt("CONTACT=a@b.com\nMANAGERDOMAIN=mgr.com, FR\nX-Y=z\na.com, 1, DIRECT\n")
		self.assertEqual(DocumentBuilder.from_document(document).build(), document)

	def test_transformation_leaves_original_untouched(self) -> None:
		document = parse_ads_txt("a.com, 1, DIRECT\n")
		extended = DocumentBuilder.from_document(document).add_system("b.com", "2", "RESELLER").build()
		self.assertEqual(len(document.systems), 1)
		self.assertEqual(len(extended.systems), 2)
		self.assertIs(extended.variant, DocumentVariant.ADS_TXT)


class DocumentConstructionTests(TestCase):
	def test_app_ads_txt_rejects_owner_domain(self) -> None:
		with self.assertRaises(BuildError) as ctx:
			Document(variant=DocumentVariant.APP_ADS_TXT, owner_domain="x.com")
		self.assertEqual(ctx.exception.kinds, [BuildViolationKind.FORBIDDEN_FIELD])
		self.assertEqual(ctx.exception.violations[0].field, "owner_domain")

	def test_app_ads_txt_rejects_manager_domain(self) -> None:
		with self.assertRaises(BuildError) as ctx:
			Document(
				variant=DocumentVariant.APP_ADS_TXT,
				owner_domain="x.com",
				manager_domain=(ManagerDomainEntry("mgr.com"),),
			)
		self.assertEqual(ctx.exception.kinds, [BuildViolationKind.FORBIDDEN_FIELD] * 2)

	def test_replace_cannot_sneak_in_a_forbidden_field(self) -> None:
		document = parse_app_ads_txt("a.com, 1, DIRECT\n")
		with self.assertRaises(BuildError):
			replace(document, owner_domain="x.com")

	def test_ads_txt_accepts_owner_and_manager_domain(self) -> None:
		document = Document(
			variant=DocumentVariant.ADS_TXT,
			owner_domain="x.com",
			manager_domain=(ManagerDomainEntry("mgr.com", "US"),),
		)
		self.assertEqual(document.owner_domain, "x.com")

	def test_system_rejects_empty_account_id(self) -> None:
		with self.assertRaises(BuildError) as ctx:
			AuthorizedSystem("a.com", "", SellerRelationType.DIRECT)
		self.assertEqual(ctx.exception.kinds, [BuildViolationKind.EMPTY_ACCOUNT_ID])

	def test_system_reports_every_problem(self) -> None:
		with self.assertRaises(BuildError) as ctx:
			AuthorizedSystem("  ", "", "DIRECT")
		self.assertEqual(
			ctx.exception.kinds,
			[
				BuildViolationKind.EMPTY_DOMAIN,
				BuildViolationKind.EMPTY_ACCOUNT_ID,
				BuildViolationKind.INVALID_ACCOUNT_TYPE,
			],
		)

	def test_builder_reports_system_violations_once(self) -> None:
		with self.assertRaises(BuildError) as ctx:
			ads_txt_builder().add_system("a.com", "", "DIRECT").build()
		self.assertEqual(ctx.exception.kinds, [BuildViolationKind.EMPTY_ACCOUNT_ID])


class VariantConversionTests(TestCase):
	def test_ads_txt_with_owner_domain_cannot_become_app_ads_txt(self) -> None:
		document = parse_ads_txt("OWNERDOMAIN=example.com\nMANAGERDOMAIN=mgr.com\na.com, 1, DIRECT\n")
		with self.assertRaises(BuildError) as ctx:
			convert_variant(document, DocumentVariant.APP_ADS_TXT)
		self.assertEqual(ctx.exception.kinds, [BuildViolationKind.FORBIDDEN_FIELD] * 2)

	def test_plain_ads_txt_becomes_app_ads_txt(self) -> None:
		document = parse_ads_txt("CONTACT=ops@example.com\nSUBDOMAIN=a.example.com\na.com, 1, DIRECT\n")
		converted = convert_variant(document, DocumentVariant.APP_ADS_TXT)
		self.assertIs(converted.variant, DocumentVariant.APP_ADS_TXT)
		self.assertEqual(converted.contact, document.contact)
		self.assertEqual(converted.subdomain, "a.example.com")
		self.assertEqual(converted.systems, document.systems)

	def test_app_ads_txt_always_becomes_ads_txt(self) -> None:
		document = parse_app_ads_txt("INVENTORYPARTNERDOMAIN=partner.com\nX-Y=z\nu.com, 2, RESELLER\n")
		converted = convert_variant(document, DocumentVariant.ADS_TXT)
		self.assertIs(converted.variant, DocumentVariant.ADS_TXT)
		self.assertEqual(converted.inventory_partner_domain, "partner.com")
		self.assertEqual(converted.ext, document.ext)
		self.assertEqual(convert_variant(converted, DocumentVariant.APP_ADS_TXT), document)

	def test_builder_can_retarget_the_variant(self) -> None:
		document = parse_app_ads_txt("a.com, 1, DIRECT\n")
		converted = (
			DocumentBuilder.from_document(document)
			.as_variant(DocumentVariant.ADS_TXT)
			.owner_domain("example.com")
			.build()
		)
		self.assertEqual(converted.owner_domain, "example.com")
		self.assertIs(document.variant, DocumentVariant.APP_ADS_TXT)
