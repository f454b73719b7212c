import unittest

from umbrel_gen.models import ManifestDescriptor
from umbrel_gen.validation import validate_manifest


class ValidateManifestTests(unittest.TestCase):
    def test_reports_missing_labels_in_declared_order(self):
        result = validate_manifest(ManifestDescriptor(name="My App", port="8080"))
        self.assertFalse(result.is_valid)
        self.assertEqual(
            result.missing_fields,
            [
                "ID",
                "Version",
                "Tagline",
                "Description",
                "Developer",
                "Website",
                "Repository",
                "Support",
                "Submitter",
                "Submission",
            ],
        )

    def test_blank_strings_count_as_missing(self):
        result = validate_manifest(ManifestDescriptor(id="   ", name="\t"))
        self.assertIn("ID", result.missing_fields)
        self.assertIn("Name", result.missing_fields)
        self.assertEqual(len(result.missing_fields), 12)

    def test_complete_descriptor_is_valid(self):
        descriptor = ManifestDescriptor(
            id="my-app",
            name="My App",
            version="1.0.0",
            tagline="Tag",
            description="Desc",
            developer="Dev",
            website="https://example.com",
            repo="https://github.com/x/y",
            support="https://github.com/x/y/issues",
            port="8080",
            submitter="Jane",
            submission="https://github.com/getumbrel/umbrel-apps/pull/1",
        )
        result = validate_manifest(descriptor)
        self.assertTrue(result.is_valid)
        self.assertEqual(result.missing_fields, [])
        self.assertEqual(
            result.model_dump(by_alias=True),
            {"isValid": True, "missingFields": []},
        )


if __name__ == "__main__":
    unittest.main()
