import unittest

from pydantic import ValidationError

from umbrel_gen.models import (
    ComposeDescriptor,
    ComposeProfile,
    EnvLines,
    EnvMapping,
    ManifestDescriptor,
    ServiceRecord,
)


class DescriptorModelTests(unittest.TestCase):
    def test_manifest_accepts_wire_names_and_numbers(self):
        descriptor = ManifestDescriptor.model_validate(
            {
                "manifestVersion": "1.1",
                "releaseNotes": "notes",
                "deterministicPassword": True,
                "galleryCount": 3,
                "port": 8080,
            }
        )
        self.assertEqual(descriptor.manifest_version, "1.1")
        self.assertEqual(descriptor.release_notes, "notes")
        self.assertTrue(descriptor.deterministic_password)
        self.assertEqual(descriptor.screenshot_count, 3)
        self.assertEqual(descriptor.port, "8080")

    def test_manifest_defaults(self):
        descriptor = ManifestDescriptor()
        self.assertEqual(descriptor.manifest_version, "1")
        self.assertEqual(descriptor.category, "automation")
        self.assertIsNone(descriptor.screenshot_count)
        self.assertFalse(descriptor.deterministic_password)

    def test_descriptors_are_frozen(self):
        descriptor = ManifestDescriptor(name="x")
        with self.assertRaises(ValidationError):
            descriptor.name = "y"

    def test_unknown_category_is_rejected(self):
        with self.assertRaises(ValidationError):
            ManifestDescriptor(category="games")

    def test_flat_environment_payload_is_converted(self):
        service = ServiceRecord.model_validate(
            {
                "name": "web",
                "environmentFormat": "array",
                "environment": {"IGNORED": "1"},
                "environmentArray": ["A=1", ""],
            }
        )
        self.assertIsInstance(service.environment, EnvLines)
        self.assertEqual(service.environment.lines, ["A=1", ""])

        service = ServiceRecord.model_validate(
            {"name": "web", "environmentFormat": "object", "environment": {"A": "1"}}
        )
        self.assertIsInstance(service.environment, EnvMapping)
        self.assertEqual(service.environment.values, {"A": "1"})

    def test_flat_environment_payload_is_cleaned(self):
        service = ServiceRecord.model_validate(
            {"name": "web", "environmentFormat": "array", "environmentArray": "\"A=1\"\n'B=2'\n"}
        )
        self.assertEqual(service.environment.lines, ["A=1", "B=2", ""])

        service = ServiceRecord.model_validate(
            {"name": "web", "environmentFormat": "object", "environment": {' "MY KEY" ': 3, '""': "x"}}
        )
        self.assertEqual(service.environment.values, {"MYKEY": "3"})

    def test_tagged_environment_payload(self):
        service = ServiceRecord.model_validate(
            {"name": "web", "environment": {"format": "array", "lines": ["A=1"]}}
        )
        self.assertIsInstance(service.environment, EnvLines)

    def test_app_proxy_uses_env_names_on_the_wire(self):
        descriptor = ComposeDescriptor.model_validate(
            {"appProxy": {"enabled": True, "APP_HOST": "web", "APP_PORT": 80}}
        )
        self.assertEqual(descriptor.app_proxy.app_host, "web")
        self.assertEqual(descriptor.app_proxy.app_port, "80")
        dumped = descriptor.model_dump(by_alias=True)
        self.assertEqual(dumped["appProxy"]["APP_HOST"], "web")

    def test_service_lifecycle_returns_new_descriptors(self):
        empty = ComposeDescriptor()
        one = empty.add_service(name="web")
        two = one.add_service(name="db")
        self.assertEqual(empty.services, [])
        self.assertEqual([svc.name for svc in two.services], ["web", "db"])
        first_id, second_id = (svc.id for svc in two.services)
        self.assertNotEqual(first_id, second_id)
        self.assertTrue(first_id.startswith("service-"))
        self.assertEqual(two.services[0].restart, "on-failure")

        renamed = two.update_service(first_id, name="frontend", ports=["80:80"])
        self.assertEqual(renamed.services[0].name, "frontend")
        self.assertEqual(renamed.services[0].ports, ["80:80"])
        self.assertEqual(renamed.services[0].id, first_id)
        self.assertEqual(two.services[0].name, "web")

        removed = renamed.remove_service(first_id)
        self.assertEqual([svc.name for svc in removed.services], ["db"])

    def test_compose_profile_presets(self):
        self.assertTrue(ComposeProfile.strict().strict_quoting)
        self.assertFalse(ComposeProfile.minimal().strict_quoting)
        with self.assertRaises(ValidationError):
            ComposeProfile.model_validate({"quoting": "loose"})


if __name__ == "__main__":
    unittest.main()
